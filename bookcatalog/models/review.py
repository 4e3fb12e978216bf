"""
Review Model

One user's opinion of one book: a whole-star rating and some text. A user
may review the same book more than once.
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.database import Base, TimestampMixin

if TYPE_CHECKING:
    from bookcatalog.models.book import Book
    from bookcatalog.models.user import User

MIN_RATING = 1
MAX_RATING = 5


class Review(TimestampMixin, Base):
    """
    Table: reviews

    book_id and user_id never change after creation; user_id is always the
    authenticated caller who wrote the review.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_review_rating_range",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    rating: Mapped[int] = mapped_column(comment="Whole stars, 1 to 5")
    text: Mapped[str] = mapped_column(Text, comment="Review body, at least 5 characters")

    book: Mapped["Book"] = relationship(back_populates="reviews")
    user: Mapped["User"] = relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"Review(id={self.id}, book_id={self.book_id}, user_id={self.user_id}, rating={self.rating})"
