"""
SQLAlchemy Models Package

Model Relationships:
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many (a book collects many reviews)

Import all models here to:
1. Make them available as: from bookcatalog.models import Book, Review, User
2. Ensure Alembic discovers them for migrations
"""

from bookcatalog.models.user import User
from bookcatalog.models.book import Book
from bookcatalog.models.review import Review

__all__ = [
    "User",
    "Book",
    "Review",
]
