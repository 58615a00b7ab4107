"""SQLAlchemy mixins for common model patterns (DRY).

Provides: UuidMixin, UserOwnedMixin, TimestampMixin, SlotMixin.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class UuidMixin:
    """Mixin for models keyed by a database-generated UUID (stored and read as text)."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True)


class UserOwnedMixin:
    """Mixin for per-user rows. Provides user_id FK to profiles with CASCADE delete."""

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at (server default, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )


class SlotMixin:
    """Mixin for ranked rows: 1-based slot within the user's list."""

    @declared_attr
    def slot(cls) -> Mapped[int]:
        return mapped_column(Integer, nullable=False)
