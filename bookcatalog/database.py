"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the Book Catalog API.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

Review writes and the rating recompute they trigger share one session and
are committed together, so the derived average never drifts from the
review set.
"""

import logging
from collections.abc import Generator
from datetime import UTC, datetime

from sqlalchemy import DateTime, create_engine, func, text
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from bookcatalog.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Pool sizing only applies to server databases; SQLite rejects those
# arguments and needs check_same_thread disabled for the threadpool FastAPI
# runs sync endpoints on.

engine_options: dict = {
    "pool_pre_ping": True,
    "echo": settings.debug,
}
if settings.is_sqlite:
    engine_options["connect_args"] = {"check_same_thread": False}
else:
    engine_options["pool_size"] = settings.db_pool_size
    engine_options["max_overflow"] = settings.db_max_overflow

engine = create_engine(settings.database_url, **engine_options)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """created_at/updated_at columns stamped in UTC by the application."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


# =============================================================================
# Primary Keys
# =============================================================================
# Ids are INTEGER columns; anything outside this range cannot name a row and
# would overflow the driver's parameter binding.
MAX_ID = 2**31 - 1


def is_valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields a session for the duration of one request and always closes it,
    even when the route raises.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_database_connection() -> None:
    """
    Verify the database answers a trivial query.

    Called at application startup and by the health endpoint.

    Raises:
        SQLAlchemyError: If the database cannot be reached
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database connection verified")


def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)
