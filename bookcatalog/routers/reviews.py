"""
Reviews Router

Endpoints for book reviews.

Endpoints:
- GET /books/{book_id}/reviews - List reviews for a book, with usernames
- POST /books/{book_id}/reviews - Create a review (authenticated)
- PATCH /books/reviews/{review_id} - Update a review (owner only)
- DELETE /books/reviews/{review_id} - Delete a review (owner only)

Business Rules:
- The reviewer is always the authenticated caller
- Only the review author can update or delete a review; anyone else gets
  the same 404 as for a review that does not exist
- Every create/update/delete refreshes the book's average rating
"""

from fastapi import APIRouter, Request, status

from bookcatalog.config import get_settings
from bookcatalog.dependencies import CurrentUser, DbSession
from bookcatalog.schemas import MessageResponse
from bookcatalog.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
    ReviewWithUserResponse,
)
from bookcatalog.services import reviews
from bookcatalog.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    tags=["Reviews"],
    responses={
        404: {"description": "Book not found, or review not found or unauthorized"},
    },
)


# =============================================================================
# Individual Review Endpoints
# =============================================================================
# Registered before the books router so /books/reviews/{id} is not captured
# by /books/{book_id}.


@router.patch(
    "/books/reviews/{review_id}",
    response_model=ReviewResponse,
    summary="Update a review",
    description="Update your own review's rating and/or text.",
)
@limiter.limit(settings.rate_limit_write)
def update_review(
    request: Request,
    review_id: int,
    review_data: ReviewUpdate,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewResponse:
    """
    Update an existing review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: 404 if missing or not the author
    """
    review = reviews.update_review(db, review_id, current_user.id, review_data)
    return ReviewResponse.model_validate(review)


@router.delete(
    "/books/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
    description="Delete your own review.",
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Delete a review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: 404 if missing or not the author
    """
    reviews.delete_review(db, review_id, current_user.id)
    return MessageResponse(message="Review deleted successfully")


# =============================================================================
# Book Review Endpoints
# =============================================================================
@router.get(
    "/books/{book_id}/reviews",
    response_model=list[ReviewWithUserResponse],
    summary="List reviews for a book",
    description="Get all reviews for a book, oldest first, with each reviewer's username.",
)
@limiter.limit(settings.rate_limit_default)
def list_book_reviews(
    request: Request,
    book_id: int,
    db: DbSession,
) -> list[ReviewWithUserResponse]:
    """
    List all reviews for a specific book.

    Raises:
        BookNotFoundError: 404 if book not found
    """
    return [
        ReviewWithUserResponse.model_validate(review)
        for review in reviews.list_reviews(db, book_id)
    ]


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Rate (1-5) and review a book. Requires authentication.",
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    book_id: int,
    review_data: ReviewCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewResponse:
    """
    Create a new review for a book.

    Raises:
        BookNotFoundError: 404 if book not found
    """
    review = reviews.create_review(db, book_id, current_user.id, review_data)
    return ReviewResponse.model_validate(review)
