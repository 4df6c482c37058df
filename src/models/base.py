"""SQLAlchemy declarative base with common mixins."""
from datetime import UTC, datetime

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid6 import uuid7


def epoch_now() -> int:
    """Current wall-clock time as integer seconds since the Unix epoch."""
    return int(datetime.now(UTC).timestamp())


def new_id() -> str:
    """Generate a time-ordered UUIDv7 string identifier."""
    return str(uuid7())


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UUIDv7Mixin:
    """
    Mixin that adds a string UUIDv7 primary key.

    UUIDv7 values sort by creation time, so ordering by id is a stable
    tiebreaker for rows created within the same second.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at columns.

    Timestamps are integer epoch seconds, assigned in Python so the values are
    identical across database backends.
    """

    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=epoch_now)
    updated_at: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=epoch_now,
        index=True,  # Index for "sort by recently updated" queries
    )
