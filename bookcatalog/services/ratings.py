"""
Ratings Service

Maintains the denormalized rating fields on the Book model:
- average_rating: The mean of all review ratings (None if no reviews)
- review_count: Total number of reviews

recalculate_book_rating must run after every review create, update and
delete. It does not commit: the caller commits the review change and the new
aggregate in one transaction, so a failure cannot leave them out of step.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookcatalog.models import Book
from bookcatalog.models.review import Review

logger = logging.getLogger(__name__)


def lock_book(db: Session, book_id: int) -> Book | None:
    """
    Load a book with a row lock held until the transaction ends.

    Concurrent review writes for the same book queue on this lock, so each
    recompute sees every review committed before it. SQLite ignores FOR
    UPDATE; it serializes writers on its own.
    """
    stmt = select(Book).where(Book.id == book_id).with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def recalculate_book_rating(db: Session, book_id: int) -> Book | None:
    """
    Recalculate and store a book's rating aggregates.

    Args:
        db: Database session (pending changes are flushed first)
        book_id: ID of the book to update

    Returns:
        The updated Book, or None if the book does not exist
    """
    book = lock_book(db, book_id)
    if book is None:
        return None

    # Make pending review inserts/updates/deletes visible to the aggregate
    db.flush()

    stmt = select(
        func.avg(Review.rating),
        func.count(Review.id),
    ).where(Review.book_id == book_id)

    avg_rating, review_count = db.execute(stmt).one()

    book.average_rating = float(avg_rating) if avg_rating is not None else None
    book.review_count = review_count

    logger.debug(
        f"Recalculated rating for book {book_id}: "
        f"average={book.average_rating}, count={review_count}"
    )
    return book


def recalculate_all_book_ratings(db: Session) -> int:
    """
    Recalculate rating aggregations for all books and commit.

    Useful for data migrations or fixing inconsistencies.

    Returns:
        Number of books updated
    """
    stmt = select(Book.id)
    book_ids = db.execute(stmt).scalars().all()

    for book_id in book_ids:
        recalculate_book_rating(db, book_id)
    db.commit()

    logger.info(f"Recalculated ratings for {len(book_ids)} books")
    return len(book_ids)
