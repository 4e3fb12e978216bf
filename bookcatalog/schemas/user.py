"""
User Pydantic Schemas

Schemas:
- UserCreate: Registration data (username, password)
- LoginRequest: Login credentials
- UserResponse: Public user data (never exposes the password hash)
- UserPublicResponse: Minimal user info embedded in reviews
- TokenResponse: Bearer token returned by login
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PASSWORD_BYTES = 72


class UserCreate(BaseModel):
    """
    Schema for user registration.

    Example request body:
    {
        "username": "orwell_fan",
        "password": "mypassword537"
    }
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique username (3-50 characters, letters, numbers, _ . -)",
        examples=["orwell_fan", "reader48"],
    )

    password: str = Field(
        ...,
        min_length=6,
        description="Password (at least 6 characters, at most 72 bytes as UTF-8)",
        examples=["mypassword537"],
    )

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """Strip whitespace and restrict the character set."""
        v = v.strip()
        if not re.match(r"^[A-Za-z0-9_.\-]{3,50}$", v):
            raise ValueError(
                "Username must be 3-50 characters and contain only "
                "letters, numbers, underscores, dots and hyphens"
            )
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """Reject passwords longer than bcrypt's 72-byte input."""
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Schema for login credentials."""

    username: str = Field(..., min_length=1, description="Registered username")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class UserResponse(BaseModel):
    """
    Schema for user responses (what the API returns).

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier", examples=[1, 42])
    username: str = Field(..., description="Unique username")
    created_at: datetime = Field(..., description="When the user registered")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "orwell_fan",
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class UserPublicResponse(BaseModel):
    """Reviewer identity embedded in review responses."""

    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """
    Schema for the login response.

    Clients send the token back as: Authorization: Bearer <token>
    """

    token: str = Field(..., description="Signed bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 86400,
            }
        },
    )
