"""
Book Model

average_rating and review_count summarize the book's reviews. Only
services.ratings.recalculate_book_rating writes them; request bodies never do.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.database import Base, TimestampMixin

if TYPE_CHECKING:
    from bookcatalog.models.review import Review


class Book(TimestampMixin, Base):
    """
    Table: books

    Example:
        Book(title="1984", author="George Orwell", description="A dystopian novel.")
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), index=True)
    author: Mapped[str] = mapped_column(String(255), index=True, comment="Free-text author name")
    description: Mapped[str] = mapped_column(Text)

    # Exact mean of review ratings; NULL until the first review
    average_rating: Mapped[float | None] = mapped_column()
    review_count: Mapped[int] = mapped_column(default=0, server_default="0")

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title={self.title!r})"
