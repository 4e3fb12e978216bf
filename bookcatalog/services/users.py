"""
User Credential Service

Registration and password authentication.

Passwords are stored only as bcrypt hashes. Authentication failures never
reveal whether the username exists: unknown users and wrong passwords raise
the same error and take about the same time.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookcatalog.database import is_valid_id
from bookcatalog.exceptions import DuplicateUsernameError, InvalidCredentialsError
from bookcatalog.models import User
from bookcatalog.services.security import (
    dummy_verify_password,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Look up a user by id."""
    if not is_valid_id(user_id):
        return None
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Look up a user by exact username."""
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def register_user(db: Session, username: str, password: str) -> User:
    """
    Create a new user with a hashed password.

    Args:
        db: Database session
        username: Requested username (already validated by the schema)
        password: Plain text password

    Returns:
        The persisted User

    Raises:
        DuplicateUsernameError: If the username is already taken
    """
    if get_user_by_username(db, username) is not None:
        raise DuplicateUsernameError()

    user = User(
        username=username,
        hashed_password=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Concurrent registration won the unique index
        db.rollback()
        raise DuplicateUsernameError() from e
    db.refresh(user)

    logger.info(f"New user registered: {user.username}")
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Returns:
        The matching User

    Raises:
        InvalidCredentialsError: Unknown username or wrong password
    """
    user = get_user_by_username(db, username)

    if user is None:
        dummy_verify_password()
        logger.warning(f"Login failed: user not found for {username}")
        raise InvalidCredentialsError()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {username}")
        raise InvalidCredentialsError()

    logger.info(f"User logged in: {user.username}")
    return user
