"""Record source port: the authoritative store queried on a cache miss.

Implementations raise SourceQueryFailedException on any query failure.
"""

from __future__ import annotations

from typing import Protocol

from app.application.dtos.resources import (
    ArtistResult,
    PlaylistResult,
    ProfileResult,
    PromptResult,
    TrackResult,
)


class IRecordSource(Protocol):
    """Protocol for per-user record queries (profile, prompts, stats, tracks)."""

    async def query_prompts(self, user_id: str) -> list[PromptResult]:
        """Return the user's prompts, oldest first."""
        ...

    async def query_top_artists(self, user_id: str, limit: int) -> list[ArtistResult]:
        """Return up to limit top artists ordered by ascending slot."""
        ...

    async def query_playlists(self, user_id: str) -> list[PlaylistResult]:
        """Return the user's playlists."""
        ...

    async def query_top_tracks(self, user_id: str, limit: int) -> list[TrackResult]:
        """Return up to limit top tracks ordered by ascending slot."""
        ...

    async def query_selected_tracks(self, user_id: str) -> list[TrackResult]:
        """Return the user's selected tracks ordered by ascending slot."""
        ...

    async def query_profile(self, user_id: str) -> ProfileResult | None:
        """Return the user's profile, or None when no row exists."""
        ...

    async def get_stored_refresh_token(self, user_id: str) -> str | None:
        """Return the Spotify refresh token stored on the profile, if any."""
        ...
