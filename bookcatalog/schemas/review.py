"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Create a new review (rating + text)
- ReviewUpdate: Partial update of rating and/or text
- ReviewResponse: Review data as returned after create/update
- ReviewWithUserResponse: Review plus the reviewer's username, for listings

Business Rules:
- Rating must be 1-5
- Text must be at least 5 characters
- book_id and user_id come from the URL and the bearer token, never the body
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookcatalog.schemas.user import UserPublicResponse

MIN_TEXT_LENGTH = 5


def _validate_text(v: str) -> str:
    # Length is checked on the text as sent (min_length); it is stored unchanged
    if not v.strip():
        raise ValueError("Review text cannot be blank")
    return v


class ReviewBase(BaseModel):
    """Base schema with shared review fields."""

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    text: str = Field(
        ...,
        min_length=MIN_TEXT_LENGTH,
        max_length=5000,
        description="Review text (at least 5 characters)",
        examples=["Great book!"],
    )

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _validate_text(v)


class ReviewCreate(ReviewBase):
    """
    Schema for creating a new review.

    Example request body:
    {
        "rating": 4,
        "text": "Great book!"
    }
    """

    pass


class ReviewUpdate(BaseModel):
    """
    Schema for updating an existing review.

    Only rating and text can change; any other field in the body is ignored.
    """

    rating: int | None = Field(
        default=None,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
    )

    text: str | None = Field(
        default=None,
        min_length=MIN_TEXT_LENGTH,
        max_length=5000,
        description="Review text (at least 5 characters)",
    )

    @field_validator("rating")
    @classmethod
    def rating_not_null(cls, v: int | None) -> int | None:
        if v is None:
            raise ValueError("Rating cannot be null")
        return v

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("Text cannot be null")
        return _validate_text(v)


class ReviewResponse(ReviewBase):
    """Schema for review responses."""

    id: int = Field(..., description="Unique review identifier")
    book_id: int = Field(..., description="ID of the reviewed book")
    user_id: int = Field(..., description="ID of the user who wrote the review")
    created_at: datetime = Field(..., description="When the review was created")
    updated_at: datetime = Field(..., description="When the review was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "book_id": 42,
                "user_id": 7,
                "rating": 4,
                "text": "Great book!",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class ReviewWithUserResponse(ReviewResponse):
    """Review listing entry, with the reviewer's username joined in."""

    user: UserPublicResponse = Field(..., description="User who wrote the review")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "book_id": 42,
                "user_id": 7,
                "rating": 4,
                "text": "Great book!",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
                "user": {"id": 7, "username": "orwell_fan"},
            }
        },
    )
