"""
Domain Exceptions

Services raise these errors; a single handler registered in main.py turns
them into HTTP responses of the form {"detail": message}.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError                    → 400 Bad Request
    │   ├── DuplicateUsernameError
    │   └── InvalidCredentialsError
    ├── UnauthenticatedError               → 401 Unauthorized
    └── NotFoundError                      → 404 Not Found
        ├── BookNotFoundError
        └── ReviewNotFoundOrUnauthorizedError

ReviewNotFoundOrUnauthorizedError covers both a missing review and a review
owned by someone else; callers see the same response for either.
"""

from fastapi import status


class CatalogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: User-facing error description (returned as "detail")
        status_code: HTTP status used when the error reaches the API boundary
        headers: Extra response headers
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        self.headers: dict[str, str] | None = None
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Client input failed a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class DuplicateUsernameError(ValidationError):
    """Registration attempted with a username that is already taken."""

    default_message = "Username already taken"


class InvalidCredentialsError(ValidationError):
    """Unknown username or wrong password. The two cases are not distinguished."""

    default_message = "Invalid username or password"


class UnauthenticatedError(CatalogError):
    """Bearer token missing, malformed, badly signed or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class BookNotFoundError(NotFoundError):
    default_message = "Book not found"

    def __init__(self, book_id: int | None = None) -> None:
        self.book_id = book_id
        super().__init__(
            f"Book with id {book_id} not found" if book_id is not None else None
        )


class ReviewNotFoundOrUnauthorizedError(NotFoundError):
    default_message = "Review not found or unauthorized"
