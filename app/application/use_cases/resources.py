"""Per-user resource use case: cached reads and explicit invalidation.

Binds each ResourceKind to its record-source query and JSON shape, and
delegates the read/populate/invalidate protocol to CacheAside.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from app.application.dtos.resources import (
    ProfileResult,
    PromptResult,
    SpotifyStatsResult,
    TrackResult,
)
from app.core.constants import CACHE_KEY_SEP, TOP_ARTISTS_LIMIT, TOP_TRACKS_LIMIT
from app.domain.enums import ResourceKind
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.interfaces.record_source import IRecordSource
    from app.infrastructure.cache.cache_aside import CacheAside

_ADAPTERS: dict[ResourceKind, TypeAdapter[Any]] = {
    ResourceKind.USER_PROMPTS: TypeAdapter(list[PromptResult]),
    ResourceKind.SPOTIFY_STATS: TypeAdapter(SpotifyStatsResult),
    ResourceKind.SELECTED_TRACKS: TypeAdapter(list[TrackResult]),
    ResourceKind.USER_PROFILE: TypeAdapter(ProfileResult),
}


def validate_user_id(user_id: str) -> str:
    """Return the stripped user_id; raise ValidationException if empty or unsafe as a key part."""
    cleaned = (user_id or "").strip()
    if not cleaned:
        raise ValidationException("userId is required", field="user_id")
    if CACHE_KEY_SEP in cleaned:
        raise ValidationException(
            f"userId must not contain {CACHE_KEY_SEP!r}", field="user_id"
        )
    return cleaned


class ResourceService:
    """Cached access to user prompts, spotify stats, selected tracks and profile."""

    def __init__(self, cache_aside: "CacheAside", record_source: "IRecordSource") -> None:
        self.cache_aside = cache_aside
        self.record_source = record_source
        self._loaders: dict[ResourceKind, Callable[[str], Awaitable[Any]]] = {
            ResourceKind.USER_PROMPTS: self.record_source.query_prompts,
            ResourceKind.SPOTIFY_STATS: self._load_stats,
            ResourceKind.SELECTED_TRACKS: self._load_selected_tracks,
            ResourceKind.USER_PROFILE: self._load_profile,
        }

    @traced("resources.fetch")
    async def fetch_resource(self, kind: ResourceKind, user_id: str) -> Any:
        """Return the resource for user_id, preferring the cache.

        Raises:
            ValidationException: user_id is empty.
            SourceQueryFailedException: Record source failed (nothing cached).
            ResourceNotFoundException: Profile row is missing (nothing cached).
        """
        user_id = validate_user_id(user_id)
        loader = self._loaders[kind]
        return await self.cache_aside.fetch(
            kind,
            user_id,
            lambda: loader(user_id),
            _ADAPTERS[kind],
        )

    @staticmethod
    def to_json(kind: ResourceKind, value: Any) -> bytes:
        """Serialize a fetched value with the same adapter used for the cache."""
        return _ADAPTERS[kind].dump_json(value)

    @traced("resources.invalidate")
    async def invalidate_resource(self, kind: ResourceKind, user_id: str) -> None:
        """Drop the cached resource so the next fetch reloads it."""
        user_id = validate_user_id(user_id)
        await self.cache_aside.invalidate(kind, user_id)

    async def _load_stats(self, user_id: str) -> SpotifyStatsResult:
        """Run the three stats sub-queries; any failure fails the whole load."""
        artists = await self.record_source.query_top_artists(user_id, TOP_ARTISTS_LIMIT)
        playlists = await self.record_source.query_playlists(user_id)
        tracks = await self.record_source.query_top_tracks(user_id, TOP_TRACKS_LIMIT)
        return SpotifyStatsResult(
            top_artists=sorted(artists, key=lambda a: a.slot)[:TOP_ARTISTS_LIMIT],
            playlists=list(playlists),
            top_tracks=sorted(tracks, key=lambda t: t.slot)[:TOP_TRACKS_LIMIT],
        )

    async def _load_selected_tracks(self, user_id: str) -> list[TrackResult]:
        tracks = await self.record_source.query_selected_tracks(user_id)
        return sorted(tracks, key=lambda t: t.slot)

    async def _load_profile(self, user_id: str) -> ProfileResult:
        profile = await self.record_source.query_profile(user_id)
        if profile is None:
            raise ResourceNotFoundException(ResourceKind.USER_PROFILE.value, user_id)
        return profile
