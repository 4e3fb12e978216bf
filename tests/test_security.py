"""
Tests for the Security Service

Password hashing and bearer token issue/verify, without going through HTTP.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from bookcatalog.exceptions import UnauthenticatedError
from bookcatalog.services.security import (
    TokenService,
    hash_password,
    verify_password,
)

SECRET = "unit-test-signing-key-that-is-long-enough-1234"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret_key=SECRET, expire_minutes=30)


class TestPasswordHashing:
    def test_hash_is_salted(self):
        """Hashing the same password twice gives different hashes."""
        first = hash_password("mypassword537")
        second = hash_password("mypassword537")

        assert first != second
        assert verify_password("mypassword537", first)
        assert verify_password("mypassword537", second)

    def test_wrong_password_fails(self):
        hashed = hash_password("mypassword537")

        assert not verify_password("mypassword538", hashed)


class TestTokenService:
    def test_issue_and_verify(self, tokens: TokenService):
        token = tokens.issue(42)

        assert token.count(".") == 2
        assert tokens.verify(token) == 42

    def test_claims(self, tokens: TokenService):
        """Tokens carry the subject, issue time, expiry and type."""
        token = tokens.issue(7)
        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == "7"
        assert claims["type"] == "access"
        assert claims["exp"] - claims["iat"] == 30 * 60

    def test_expires_in(self, tokens: TokenService):
        assert tokens.expires_in == 30 * 60

    def test_expired_token_rejected(self, tokens: TokenService):
        token = tokens.issue(42, expires_delta=timedelta(seconds=-10))

        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)

    def test_token_signed_with_other_key_rejected(self, tokens: TokenService):
        other = TokenService(secret_key="a-completely-different-signing-key-0000")
        token = other.issue(42)

        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)

    def test_malformed_token_rejected(self, tokens: TokenService):
        with pytest.raises(UnauthenticatedError):
            tokens.verify("not.a.token")

    def test_wrong_token_type_rejected(self, tokens: TokenService):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "42", "iat": now, "exp": now + timedelta(minutes=5), "type": "refresh"},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)

    def test_non_numeric_subject_rejected(self, tokens: TokenService):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "alice", "exp": now + timedelta(minutes=5), "type": "access"},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)
