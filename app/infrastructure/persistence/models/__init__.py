"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    SlotMixin,
    TimestampMixin,
    UserOwnedMixin,
    UuidMixin,
)
from app.infrastructure.persistence.models.music import (
    Playlist,
    SelectedTrack,
    TopArtist,
    TopTrack,
)
from app.infrastructure.persistence.models.profile import Profile
from app.infrastructure.persistence.models.prompt import UserPrompt

__all__ = [
    "Playlist",
    "Profile",
    "SelectedTrack",
    "SlotMixin",
    "TimestampMixin",
    "TopArtist",
    "TopTrack",
    "UserOwnedMixin",
    "UserPrompt",
    "UuidMixin",
]
