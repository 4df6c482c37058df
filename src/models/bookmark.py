"""Bookmark model for storing user bookmarks."""
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin

if TYPE_CHECKING:
    from models.user import User


class Bookmark(Base, UUIDv7Mixin, TimestampMixin):
    """Bookmark model - a saved link owned by exactly one user."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        # Listing is always scoped to one owner's active bookmarks
        Index("ix_bookmarks_user_active", "user_id", "removed_at", "created_at"),
    )

    # id provided by UUIDv7Mixin
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    html: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Soft delete timestamp; 0 means the bookmark is active
    removed_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, index=True)

    user: Mapped["User"] = relationship(back_populates="bookmarks")

    @property
    def is_removed(self) -> bool:
        """Check if bookmark has been soft-removed."""
        return self.removed_at > 0
