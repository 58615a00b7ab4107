"""Application DTOs: read-models returned by use cases and cached as JSON."""

from app.application.dtos.resources import (
    ArtistResult,
    PlaylistResult,
    ProfileResult,
    PromptResult,
    SpotifyStatsResult,
    TrackResult,
)

__all__ = [
    "ArtistResult",
    "PlaylistResult",
    "ProfileResult",
    "PromptResult",
    "SpotifyStatsResult",
    "TrackResult",
]
