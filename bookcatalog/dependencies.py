"""
FastAPI Dependencies Module

Reusable components injected into route handlers with Depends():
- Database sessions (per-request)
- Token service (process-wide, overridable in tests)
- Authentication (resolve the bearer token to a User)
- Book list filters
"""

import logging
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookcatalog.database import get_db
from bookcatalog.exceptions import UnauthenticatedError
from bookcatalog.models import User
from bookcatalog.services.security import TokenService, get_token_service
from bookcatalog.services.users import get_user

logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]
Tokens = Annotated[TokenService, Depends(get_token_service)]


# =============================================================================
# Book List Filters
# =============================================================================
class BookSearchParams:
    """
    Optional filters for the book listing.

    Usage:
        GET /books?title=1984
        GET /books?author=orwell
    """

    def __init__(
        self,
        title: str | None = Query(
            default=None,
            min_length=1,
            max_length=100,
            description="Filter by title (partial match, case-insensitive)",
            examples=["1984"],
        ),
        author: str | None = Query(
            default=None,
            min_length=1,
            max_length=100,
            description="Filter by author (partial match, case-insensitive)",
            examples=["orwell"],
        ),
    ) -> None:
        self.title = title
        self.author = author


BookFilters = Annotated[BookSearchParams, Depends()]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# auto_error=False so a missing header produces our own 401 response rather
# than the scheme's default error.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    db: DbSession,
    tokens: Tokens,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """
    Resolve the Authorization: Bearer <token> header to a User.

    Raises:
        UnauthenticatedError: Missing header, invalid/expired token, or the
            token refers to a user that no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authenticated")

    user_id = tokens.verify(credentials.credentials)

    user = get_user(db, user_id)
    if user is None:
        logger.warning(f"Token for unknown user {user_id}")
        raise UnauthenticatedError()

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
