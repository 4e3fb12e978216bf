"""
User Model

A registered account. The username is the login identifier; the password
exists only as a bcrypt hash.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.database import Base, TimestampMixin

if TYPE_CHECKING:
    from bookcatalog.models.review import Review


class User(TimestampMixin, Base):
    """Table: users"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username!r})"
