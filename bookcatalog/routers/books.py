"""
Books Router

CRUD endpoints for books.

Endpoints:
- GET /books - List all books (optional title/author filters)
- GET /books/{book_id} - Get one book
- POST /books - Create a book (authenticated)
- PATCH /books/{book_id} - Partially update a book (authenticated)
- DELETE /books/{book_id} - Delete a book and its reviews (authenticated)

Any authenticated user may modify any book. average_rating and
review_count are read-only here; they follow the book's reviews.
"""

from fastapi import APIRouter, Request, status

from bookcatalog.config import get_settings
from bookcatalog.dependencies import BookFilters, CurrentUser, DbSession
from bookcatalog.schemas import (
    BookCreate,
    BookResponse,
    BookUpdate,
    MessageResponse,
)
from bookcatalog.services import catalog
from bookcatalog.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book in the catalog, optionally filtered by title or author.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    filters: BookFilters,
) -> list[BookResponse]:
    """
    List all books in the order they were added.

    Returns:
        Array of books including their rating aggregates
    """
    books = catalog.list_books(db, title=filters.title, author=filters.author)
    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve detailed information about a specific book.",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> BookResponse:
    """
    Get a single book by its ID.

    Raises:
        BookNotFoundError: 404 if book not found
    """
    return BookResponse.model_validate(catalog.get_book(db, book_id))


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a new book. Title, author and description are required.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Create a new book.

    Returns:
        Created book with empty rating aggregates
    """
    book = catalog.create_book(db, book_data)
    return BookResponse.model_validate(book)


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="Partially update a book. Only provided fields are changed.",
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Update an existing book.

    Raises:
        BookNotFoundError: 404 if book not found
    """
    book = catalog.update_book(db, book_id, book_data)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
    description="Delete a book and all of its reviews.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Delete a book.

    Raises:
        BookNotFoundError: 404 if book not found
    """
    catalog.delete_book(db, book_id)
    return MessageResponse(message="Book deleted successfully")
