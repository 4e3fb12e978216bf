"""
Book Pydantic Schemas

- BookCreate: title, author and description are all required
- BookUpdate: partial update, every field optional
- BookResponse: includes the rating aggregates maintained by the server

average_rating and review_count are deliberately absent from the input
schemas; unknown fields in a request body are ignored.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(v: str) -> str:
    if not v.strip():
        raise ValueError("Field cannot be empty or whitespace")
    return v.strip()


class BookBase(BaseModel):
    """Base schema with shared book fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "The Great Gatsby"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["George Orwell", "F. Scott Fitzgerald"],
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Book description or summary",
        examples=["A novel set in the Jazz Age."],
    )

    @field_validator("title", "author", "description")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Validate and normalize required text fields."""
        return _strip_required(v)


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "description": "A dystopian novel set in a totalitarian society."
    }
    """

    pass


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    All fields are optional for PATCH-style updates; only fields present in
    the request body are applied.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=500,
        description="Book title",
    )

    author: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Author name",
    )

    description: str | None = Field(
        default=None,
        min_length=1,
        max_length=5000,
        description="Book description",
    )

    @field_validator("title", "author", "description")
    @classmethod
    def must_not_be_blank(cls, v: str | None) -> str | None:
        # An explicit null would violate the NOT NULL columns
        if v is None:
            raise ValueError("Field cannot be null")
        return _strip_required(v)


class BookResponse(BookBase):
    """
    Schema for book responses.

    Includes:
    - Database fields (id, timestamps)
    - Rating aggregates (average_rating is null while there are no reviews)
    """

    id: int = Field(..., description="Unique book identifier")

    average_rating: float | None = Field(
        default=None,
        description="Mean review rating (1-5), null if the book has no reviews",
    )

    review_count: int = Field(
        default=0,
        description="Number of reviews",
    )

    created_at: datetime = Field(..., description="When the book was added")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "author": "George Orwell",
                "description": "A dystopian novel set in a totalitarian society.",
                "average_rating": 3.0,
                "review_count": 2,
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
