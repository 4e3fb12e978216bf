"""
Catalog Service

CRUD operations over books. Any authenticated user may create, edit or
delete any book; the routers enforce authentication, this module only deals
with the data.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookcatalog.database import is_valid_id
from bookcatalog.exceptions import BookNotFoundError
from bookcatalog.models import Book
from bookcatalog.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


def get_book(db: Session, book_id: int) -> Book:
    """
    Get a book by ID.

    Raises:
        BookNotFoundError: If no book has this id
    """
    book = db.get(Book, book_id) if is_valid_id(book_id) else None
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def list_books(
    db: Session,
    title: str | None = None,
    author: str | None = None,
) -> list[Book]:
    """
    List books in the order they were added.

    Args:
        title: Optional case-insensitive partial match on the title
        author: Optional case-insensitive partial match on the author

    % and _ in the filters match themselves, not SQL wildcards.
    """
    stmt = select(Book)

    if title:
        stmt = stmt.where(Book.title.icontains(title, autoescape=True))
    if author:
        stmt = stmt.where(Book.author.icontains(author, autoescape=True))

    stmt = stmt.order_by(Book.created_at, Book.id)
    return list(db.execute(stmt).scalars().all())


def create_book(db: Session, book_data: BookCreate) -> Book:
    """Create a new book. Rating aggregates start empty."""
    book = Book(
        title=book_data.title,
        author=book_data.author,
        description=book_data.description,
        average_rating=None,
        review_count=0,
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Created book {book.id}: {book.title}")
    return book


def update_book(db: Session, book_id: int, book_data: BookUpdate) -> Book:
    """
    Apply a partial update to a book.

    Only fields present in the request are changed.

    Raises:
        BookNotFoundError: If no book has this id
    """
    book = get_book(db, book_id)

    update_data = book_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(book, field, value)

    db.commit()
    db.refresh(book)

    logger.info(f"Updated book {book.id}: {sorted(update_data)}")
    return book


def delete_book(db: Session, book_id: int) -> None:
    """
    Delete a book and, by cascade, its reviews.

    Raises:
        BookNotFoundError: If no book has this id
    """
    book = get_book(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Deleted book {book_id}")
