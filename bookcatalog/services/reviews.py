"""
Review Service

Create, list, update and delete book reviews while keeping the owning
book's rating aggregates consistent.

Every mutation follows the same shape:
1. Check the book exists / the caller owns the review
2. Apply the change to the session
3. recalculate_book_rating() in the same session
4. Commit once

Ownership failures are reported exactly like missing reviews.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookcatalog.database import is_valid_id
from bookcatalog.exceptions import ReviewNotFoundOrUnauthorizedError
from bookcatalog.models.review import Review
from bookcatalog.schemas.review import ReviewCreate, ReviewUpdate
from bookcatalog.services.catalog import get_book
from bookcatalog.services.ratings import recalculate_book_rating

logger = logging.getLogger(__name__)


def get_owned_review(db: Session, review_id: int, user_id: int) -> Review:
    """
    Get a review that belongs to the given user.

    Raises:
        ReviewNotFoundOrUnauthorizedError: If the review does not exist or
            was written by someone else
    """
    review = None
    if is_valid_id(review_id):
        stmt = select(Review).where(
            Review.id == review_id,
            Review.user_id == user_id,
        )
        review = db.execute(stmt).scalar_one_or_none()

    if review is None:
        logger.info(f"Review {review_id} not found or not owned by user {user_id}")
        raise ReviewNotFoundOrUnauthorizedError()
    return review


def list_reviews(db: Session, book_id: int) -> list[Review]:
    """
    List all reviews for a book, oldest first, with reviewers loaded.

    Raises:
        BookNotFoundError: If the book does not exist
    """
    get_book(db, book_id)

    stmt = (
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.book_id == book_id)
        .order_by(Review.created_at, Review.id)
    )
    return list(db.execute(stmt).scalars().all())


def create_review(
    db: Session,
    book_id: int,
    user_id: int,
    review_data: ReviewCreate,
) -> Review:
    """
    Create a review and refresh the book's rating.

    Args:
        book_id: ID of the book being reviewed
        user_id: Authenticated caller; always the review's owner
        review_data: Validated rating and text

    Raises:
        BookNotFoundError: If the book does not exist (nothing is written)
    """
    get_book(db, book_id)

    review = Review(
        book_id=book_id,
        user_id=user_id,
        rating=review_data.rating,
        text=review_data.text,
    )
    db.add(review)

    recalculate_book_rating(db, book_id)
    db.commit()
    db.refresh(review)

    logger.info(f"User {user_id} reviewed book {book_id} (rating={review.rating})")
    return review


def update_review(
    db: Session,
    review_id: int,
    user_id: int,
    review_data: ReviewUpdate,
) -> Review:
    """
    Update the rating and/or text of the caller's own review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: Missing review or not the owner
    """
    review = get_owned_review(db, review_id, user_id)

    update_data = review_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(review, field, value)

    recalculate_book_rating(db, review.book_id)
    db.commit()
    db.refresh(review)

    logger.info(f"User {user_id} updated review {review_id}: {sorted(update_data)}")
    return review


def delete_review(db: Session, review_id: int, user_id: int) -> None:
    """
    Delete the caller's own review and refresh the book's rating.

    Raises:
        ReviewNotFoundOrUnauthorizedError: Missing review or not the owner
    """
    review = get_owned_review(db, review_id, user_id)
    book_id = review.book_id

    db.delete(review)
    recalculate_book_rating(db, book_id)
    db.commit()

    logger.info(f"User {user_id} deleted review {review_id} of book {book_id}")
