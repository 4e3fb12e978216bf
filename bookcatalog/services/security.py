"""
Security Service

Handles password hashing and bearer token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. Signed, stateless JWT bearer tokens (python-jose)
3. Constant-time password verification

Tokens are not tracked server-side: a token stays valid until it expires,
and the only way to invalidate all tokens early is to change SECRET_KEY.

Usage:
    from bookcatalog.services.security import get_token_service, hash_password

    hashed = hash_password("mypassword537")
    token = get_token_service().issue(user.id)
    user_id = get_token_service().verify(token)
"""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookcatalog.config import get_settings
from bookcatalog.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# CryptContext handles salting and hashing with bcrypt
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt hash of the password

    Example:
        >>> hashed = hash_password("mypassword537")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify_password() -> None:
    """
    Spend the time of one hash verification without checking anything.

    Used when the username does not exist, so a failed login takes as long
    as a wrong password would.
    """
    pwd_context.dummy_verify()


# -------------------------------------------------------------------------
# Bearer Tokens
# -------------------------------------------------------------------------
ACCESS_TOKEN_TYPE = "access"


class TokenService:
    """
    Issues and verifies signed bearer tokens binding a user id.

    The signing key is fixed at construction; build one instance per
    process with get_token_service().

    Claims:
    - sub: user id (JWT requires a string)
    - iat: issue time
    - exp: expiry time
    - type: always "access"
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expire_minutes * 60

    def issue(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: Identity to bind into the token
            expires_delta: Optional custom lifetime

        Returns:
            Encoded JWT string (header.payload.signature)
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta or timedelta(minutes=self._expire_minutes))

        claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": expire,
            "type": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """
        Decode a token and return the user id it carries.

        Raises:
            UnauthenticatedError: bad signature, malformed token, expired
                token, wrong token type or missing/non-numeric subject
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            raise UnauthenticatedError() from e

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            logger.warning(f"Token type mismatch: expected {ACCESS_TOKEN_TYPE}")
            raise UnauthenticatedError()

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            logger.warning(f"Token subject is not a user id: {subject!r}")
            raise UnauthenticatedError() from e


@lru_cache
def get_token_service() -> TokenService:
    """
    Build the process-wide TokenService from settings.

    Returns:
        Cached TokenService instance
    """
    settings = get_settings()
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
