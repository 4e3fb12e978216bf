"""
Pydantic Schemas Package

Request/response validation, kept separate from the SQLAlchemy models so
the API controls exactly which fields are accepted and exposed.

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional)
- XxxResponse: Fields returned in API responses
"""

from pydantic import BaseModel, Field

from bookcatalog.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from bookcatalog.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserPublicResponse,
    UserResponse,
)
from bookcatalog.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
    ReviewWithUserResponse,
)


class MessageResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    message: str = Field(..., description="Human-readable confirmation")


__all__ = [
    "MessageResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    # User schemas
    "UserCreate",
    "UserResponse",
    "UserPublicResponse",
    # Auth/Token schemas
    "LoginRequest",
    "TokenResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewWithUserResponse",
]
