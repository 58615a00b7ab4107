"""Music statistics ORM models: top artists, top tracks, playlists, selected tracks."""

from sqlalchemy import JSON, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    SlotMixin,
    TimestampMixin,
    UserOwnedMixin,
    UuidMixin,
)


class TopArtist(UuidMixin, UserOwnedMixin, SlotMixin, Base):
    """Ranked top artist. Table: top_artists. Unique (user_id, slot)."""

    __tablename__ = "top_artists"

    name: Mapped[str] = mapped_column(String, nullable=False)
    spotify_id: Mapped[str | None] = mapped_column(String, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    genres: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (UniqueConstraint("user_id", "slot", name="uq_top_artist_slot"),)


class TopTrack(UuidMixin, UserOwnedMixin, SlotMixin, Base):
    """Ranked top track. Table: top_tracks. Unique (user_id, slot)."""

    __tablename__ = "top_tracks"

    name: Mapped[str] = mapped_column(String, nullable=False)
    artist: Mapped[str] = mapped_column(String, nullable=False)
    spotify_id: Mapped[str | None] = mapped_column(String, nullable=True)
    album_art_url: Mapped[str | None] = mapped_column(String, nullable=True)
    preview_url: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (UniqueConstraint("user_id", "slot", name="uq_top_track_slot"),)


class Playlist(UuidMixin, UserOwnedMixin, TimestampMixin, Base):
    """Playlist shared on the profile. Table: playlists."""

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String, nullable=False)
    spotify_id: Mapped[str | None] = mapped_column(String, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    track_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class SelectedTrack(UuidMixin, UserOwnedMixin, SlotMixin, Base):
    """Track the user pinned to their profile. Table: selected_tracks. Unique (user_id, slot)."""

    __tablename__ = "selected_tracks"

    name: Mapped[str] = mapped_column(String, nullable=False)
    artist: Mapped[str] = mapped_column(String, nullable=False)
    spotify_id: Mapped[str | None] = mapped_column(String, nullable=True)
    album_art_url: Mapped[str | None] = mapped_column(String, nullable=True)
    preview_url: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (UniqueConstraint("user_id", "slot", name="uq_selected_track_slot"),)
