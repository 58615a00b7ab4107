"""User prompt ORM model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UserOwnedMixin,
    UuidMixin,
)


class UserPrompt(UuidMixin, UserOwnedMixin, TimestampMixin, Base):
    """A prompt/answer pair shown on the user's profile. Table: user_prompts."""

    __tablename__ = "user_prompts"

    prompt: Mapped[str] = mapped_column(String, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
