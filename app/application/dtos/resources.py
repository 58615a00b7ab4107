"""DTOs for cached per-user resources (no dependency on ORM).

These are the exact shapes written to and read back from the cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PromptResult:
    """A profile prompt answered by the user."""

    id: str
    user_id: str
    prompt: str
    answer: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class ArtistResult:
    """One of the user's top artists. slot is 1-based rank."""

    slot: int
    name: str
    spotify_id: str | None = None
    image_url: str | None = None
    genres: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrackResult:
    """A ranked track (top track or selected track). slot is 1-based."""

    slot: int
    name: str
    artist: str
    spotify_id: str | None = None
    album_art_url: str | None = None
    preview_url: str | None = None


@dataclass(frozen=True)
class PlaylistResult:
    """A playlist the user shared on their profile."""

    id: str
    name: str
    spotify_id: str | None = None
    image_url: str | None = None
    track_count: int = 0


@dataclass(frozen=True)
class SpotifyStatsResult:
    """Composite stats: top artists, playlists and top tracks, ordered by slot."""

    top_artists: list[ArtistResult]
    playlists: list[PlaylistResult]
    top_tracks: list[TrackResult]


@dataclass(frozen=True)
class ProfileResult:
    """User profile read-model. Never includes the stored refresh token."""

    id: str
    username: str | None
    display_name: str | None
    email: str | None
    avatar_url: str | None = None
    bio: str | None = None
    spotify_id: str | None = None
    created_at: datetime | None = None
