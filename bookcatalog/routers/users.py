"""
Users Router

Registration, login and the current user's profile.

Endpoints:
- POST /users/register - Create an account
- POST /users/login - Exchange username/password for a bearer token
- GET /users/me - Current user's profile (authenticated)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Login failures do not reveal whether the username exists
"""

import logging

from fastapi import APIRouter, Request, status

from bookcatalog.config import get_settings
from bookcatalog.dependencies import CurrentUser, DbSession, Tokens
from bookcatalog.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from bookcatalog.services.rate_limiter import limiter
from bookcatalog.services.users import authenticate_user, register_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        400: {"description": "Validation error, duplicate username or bad credentials"},
        401: {"description": "Not authenticated"},
    },
)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new user account.

    **Username Requirements:**
    - 3-50 characters
    - Letters, numbers, underscores, dots and hyphens

    **Password Requirements:**
    - At least 6 characters, at most 72 bytes (UTF-8)
    """,
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    user_data: UserCreate,
    db: DbSession,
) -> UserResponse:
    """
    Register a new user.

    1. Validates username and password format (handled by Pydantic)
    2. Rejects a username that is already taken
    3. Stores the bcrypt hash of the password
    4. Returns user data (without password)
    """
    user = register_user(db, user_data.username, user_data.password)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="""
    Authenticate with username and password to receive a bearer token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
    tokens: Tokens,
) -> TokenResponse:
    """Authenticate a user and issue a signed bearer token."""
    user = authenticate_user(db, credentials.username, credentials.password)

    return TokenResponse(
        token=tokens.issue(user.id),
        token_type="bearer",
        expires_in=tokens.expires_in,
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile",
    description="Get the authenticated user's profile.",
)
@limiter.limit(settings.rate_limit_default)
def get_current_user_profile(
    request: Request,
    current_user: CurrentUser,
) -> UserResponse:
    """Return the user the bearer token belongs to."""
    return UserResponse.model_validate(current_user)
