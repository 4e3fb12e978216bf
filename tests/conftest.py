"""
pytest Fixtures for Book Catalog API Tests

Shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (each test runs in a rolled-back transaction)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting, sets a test secret key and keeps the
# application engine off any real database.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookcatalog.database import Base, get_db
from bookcatalog.main import app
from bookcatalog.models import Book, Review, User
from bookcatalog.services.security import get_token_service, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the entire session.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection-level transaction that is rolled
    back afterwards, so commits made by the code under test never leak
    into other tests.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client that uses the test database session.

    The get_db dependency is overridden with our session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# AUTH HELPERS
# =============================================================================
@pytest.fixture
def auth_header() -> Callable[[User], dict]:
    """Build an Authorization header carrying a valid token for a user."""

    def _auth_header(user: User) -> dict:
        token = get_token_service().issue(user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_header


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    user = User(
        username="testuser",
        hashed_password=hash_password("mypassword537"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for testing ownership scenarios."""
    user = User(
        username="seconduser",
        hashed_password=hash_password("otherpassword456"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book without reviews."""
    book = Book(
        title="1984",
        author="George Orwell",
        description="A dystopian novel set in a totalitarian society.",
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Create several books for listing and filtering."""
    books = [
        Book(title="1984", author="George Orwell", description="Dystopia."),
        Book(title="Animal Farm", author="George Orwell", description="Allegory."),
        Book(title="The Great Gatsby", author="F. Scott Fitzgerald", description="Jazz Age."),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def sample_review(
    db_session: Session,
    sample_book: Book,
    sample_user: User,
) -> Review:
    """
    Create a sample review written by sample_user.

    Inserted directly, so the book's aggregates are set by hand to match.
    """
    review = Review(
        book_id=sample_book.id,
        user_id=sample_user.id,
        rating=4,
        text="I really enjoyed reading this book.",
    )
    db_session.add(review)
    sample_book.average_rating = 4.0
    sample_book.review_count = 1
    db_session.commit()
    db_session.refresh(review)
    return review
