"""
Tests for User Endpoints

Tests:
- Registration (success, duplicates, validation)
- Login (success, wrong password, unknown user)
- Current user profile (/users/me)
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookcatalog.models.user import User
from bookcatalog.services.security import get_token_service, verify_password


# =============================================================================
# Registration
# =============================================================================
class TestRegister:
    """Tests for POST /users/register"""

    def test_register_success(self, client: TestClient, db_session: Session):
        """Test registering a new user."""
        response = client.post(
            "/users/register",
            json={"username": "teszt_user48", "password": "mypassword537"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "teszt_user48"
        assert "id" in data
        assert "password" not in data
        assert "hashed_password" not in data

    def test_register_stores_hash_not_password(
        self, client: TestClient, db_session: Session
    ):
        """The stored value is a bcrypt hash that verifies the password."""
        client.post(
            "/users/register",
            json={"username": "hashcheck", "password": "mypassword537"},
        )

        user = db_session.execute(
            select(User).where(User.username == "hashcheck")
        ).scalar_one()
        assert user.hashed_password != "mypassword537"
        assert user.hashed_password.startswith("$2b$")
        assert verify_password("mypassword537", user.hashed_password)

    def test_register_duplicate_username(self, client: TestClient):
        """Registering the same username twice fails; the first account still works."""
        first = client.post(
            "/users/register",
            json={"username": "duplicate", "password": "firstpassword"},
        )
        assert first.status_code == status.HTTP_201_CREATED

        second = client.post(
            "/users/register",
            json={"username": "duplicate", "password": "secondpassword"},
        )
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert "already taken" in second.json()["detail"]

        login = client.post(
            "/users/login",
            json={"username": "duplicate", "password": "firstpassword"},
        )
        assert login.status_code == status.HTTP_200_OK

        login_second = client.post(
            "/users/login",
            json={"username": "duplicate", "password": "secondpassword"},
        )
        assert login_second.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_missing_password(self, client: TestClient):
        """Missing fields are a 400 validation error."""
        response = client.post("/users/register", json={"username": "nopassword"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Validation failed"

    def test_register_short_password(self, client: TestClient):
        response = client.post(
            "/users/register",
            json={"username": "shortpass", "password": "abc"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_invalid_username(self, client: TestClient):
        response = client.post(
            "/users/register",
            json={"username": "bad name!", "password": "mypassword537"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_password_limit_counts_bytes(self, client: TestClient):
        """The 72 limit is in UTF-8 bytes: 40 two-byte characters are too long."""
        too_long = client.post(
            "/users/register",
            json={"username": "multibyte", "password": "é" * 40},
        )
        assert too_long.status_code == status.HTTP_400_BAD_REQUEST

        at_limit = client.post(
            "/users/register",
            json={"username": "multibyte", "password": "é" * 36},
        )
        assert at_limit.status_code == status.HTTP_201_CREATED

        login = client.post(
            "/users/login",
            json={"username": "multibyte", "password": "é" * 35 + "e"},
        )
        assert login.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login
# =============================================================================
class TestLogin:
    """Tests for POST /users/login"""

    def test_login_success(self, client: TestClient, sample_user: User):
        """A correct password returns a token bound to the user."""
        response = client.post(
            "/users/login",
            json={"username": "testuser", "password": "mypassword537"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] > 0
        assert get_token_service().verify(data["token"]) == sample_user.id

    def test_login_wrong_password(self, client: TestClient, sample_user: User):
        """A wrong password is a 400 and no token is issued."""
        response = client.post(
            "/users/login",
            json={"username": "testuser", "password": "wrongpassword"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid username or password"
        assert "token" not in response.json()

    def test_login_unknown_user(self, client: TestClient):
        """An unknown username gets the same error as a wrong password."""
        response = client.post(
            "/users/login",
            json={"username": "nobody", "password": "whatever123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid username or password"

    def test_login_token_works_on_protected_endpoint(
        self, client: TestClient, sample_user: User
    ):
        """The issued token authenticates /users/me."""
        token = client.post(
            "/users/login",
            json={"username": "testuser", "password": "mypassword537"},
        ).json()["token"]

        response = client.get(
            "/users/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "testuser"


# =============================================================================
# Current User
# =============================================================================
class TestCurrentUser:
    """Tests for GET /users/me"""

    def test_me_authenticated(
        self, client: TestClient, sample_user: User, auth_header
    ):
        response = client.get("/users/me", headers=auth_header(sample_user))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == sample_user.id
        assert data["username"] == "testuser"
        assert "hashed_password" not in data

    def test_me_without_token(self, client: TestClient):
        response = client.get("/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_me_invalid_token(self, client: TestClient):
        response = client.get(
            "/users/me",
            headers={"Authorization": "Bearer not-a-real-token"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_token_for_deleted_user(self, client: TestClient):
        """A validly signed token for a user that does not exist is rejected."""
        token = get_token_service().issue(99999)

        response = client.get(
            "/users/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_token_subject_out_of_range(self, client: TestClient):
        token = get_token_service().issue(99999999999999999999)

        response = client.get(
            "/users/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
