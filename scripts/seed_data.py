#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py

This script:
1. Connects to the database using application settings
2. Clears existing data (optional)
3. Creates sample users, books and reviews
4. Recalculates every book's rating aggregates
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session

from bookcatalog.database import SessionLocal, create_tables
from bookcatalog.models import Book, Review, User
from bookcatalog.services.ratings import recalculate_all_book_ratings
from bookcatalog.services.security import hash_password

SAMPLE_PASSWORD = "mypassword537"


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.query(Review).delete()
    db.query(Book).delete()
    db.query(User).delete()
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    """Create sample users, all sharing SAMPLE_PASSWORD."""
    print("Creating users...")
    users = {}
    for username in ["orwell_fan", "jazz_age_reader", "bookworm42"]:
        user = User(username=username, hashed_password=hash_password(SAMPLE_PASSWORD))
        db.add(user)
        users[username] = user

    db.commit()
    for user in users.values():
        db.refresh(user)

    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session) -> dict[str, Book]:
    """Create sample books."""
    print("Creating books...")
    books_data = [
        {
            "title": "1984",
            "author": "George Orwell",
            "description": "A dystopian novel set in a totalitarian society under constant surveillance.",
        },
        {
            "title": "The Great Gatsby",
            "author": "F. Scott Fitzgerald",
            "description": "A novel set in the Jazz Age.",
        },
        {
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "description": "Elizabeth Bennet navigates manners, morality and marriage in Regency England.",
        },
        {
            "title": "The Hobbit",
            "author": "J.R.R. Tolkien",
            "description": "Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.",
        },
    ]

    books = {}
    for data in books_data:
        book = Book(**data)
        db.add(book)
        books[data["title"]] = book

    db.commit()
    for book in books.values():
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def create_reviews(db: Session, users: dict[str, User], books: dict[str, Book]) -> int:
    """Create sample reviews."""
    print("Creating reviews...")
    reviews_data = [
        ("orwell_fan", "1984", 5, "Chilling and more relevant every year."),
        ("bookworm42", "1984", 4, "Bleak but brilliant."),
        ("jazz_age_reader", "The Great Gatsby", 5, "Gorgeous prose, tragic ending."),
        ("bookworm42", "The Great Gatsby", 3, "Beautiful writing, unlikeable characters."),
        ("orwell_fan", "The Hobbit", 4, "A charming adventure."),
    ]

    for username, title, rating, text in reviews_data:
        db.add(
            Review(
                user_id=users[username].id,
                book_id=books[title].id,
                rating=rating,
                text=text,
            )
        )
    db.commit()

    print(f"Created {len(reviews_data)} reviews.")
    return len(reviews_data)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        books = create_books(db)
        review_count = create_reviews(db, users, books)
        recalculate_all_book_ratings(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)} (password: {SAMPLE_PASSWORD})")
        print(f"  - Books: {len(books)}")
        print(f"  - Reviews: {review_count}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
