"""SQL record source: per-user profile, prompt and music-statistics queries.

Implements IRecordSource. Every SQLAlchemyError is logged with the query
name and user id and re-raised as SourceQueryFailedException.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.resources import (
    ArtistResult,
    PlaylistResult,
    ProfileResult,
    PromptResult,
    TrackResult,
)
from app.domain.exceptions import SourceQueryFailedException
from app.infrastructure.persistence.models import (
    Playlist,
    Profile,
    SelectedTrack,
    TopArtist,
    TopTrack,
    UserPrompt,
)

logger = logging.getLogger(__name__)


def _prompt_to_result(p: UserPrompt) -> PromptResult:
    return PromptResult(
        id=str(p.id),
        user_id=str(p.user_id),
        prompt=p.prompt,
        answer=p.answer,
        created_at=p.created_at,
    )


def _artist_to_result(a: TopArtist) -> ArtistResult:
    return ArtistResult(
        slot=a.slot,
        name=a.name,
        spotify_id=a.spotify_id,
        image_url=a.image_url,
        genres=list(a.genres or []),
    )


def _track_to_result(t: TopTrack | SelectedTrack) -> TrackResult:
    return TrackResult(
        slot=t.slot,
        name=t.name,
        artist=t.artist,
        spotify_id=t.spotify_id,
        album_art_url=t.album_art_url,
        preview_url=t.preview_url,
    )


def _playlist_to_result(p: Playlist) -> PlaylistResult:
    return PlaylistResult(
        id=str(p.id),
        name=p.name,
        spotify_id=p.spotify_id,
        image_url=p.image_url,
        track_count=p.track_count,
    )


def _profile_to_result(p: Profile) -> ProfileResult:
    return ProfileResult(
        id=str(p.id),
        username=p.username,
        display_name=p.display_name,
        email=p.email,
        avatar_url=p.avatar_url,
        bio=p.bio,
        spotify_id=p.spotify_id,
        created_at=p.created_at,
    )


class SqlRecordSource:
    """Record source backed by the Postgres tables. Implements IRecordSource."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _scalars(self, query: str, user_id: str, stmt: Select[Any]) -> list[Any]:
        """Execute stmt and return all scalars; map driver errors to SourceQueryFailed."""
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Record source query %s failed for user %s: %s", query, user_id, type(e).__name__)
            raise SourceQueryFailedException(query, user_id, type(e).__name__) from e

    async def query_prompts(self, user_id: str) -> list[PromptResult]:
        stmt = (
            select(UserPrompt)
            .where(UserPrompt.user_id == user_id)
            .order_by(UserPrompt.created_at, UserPrompt.id)
        )
        rows = await self._scalars("user_prompts", user_id, stmt)
        return [_prompt_to_result(r) for r in rows]

    async def query_top_artists(self, user_id: str, limit: int) -> list[ArtistResult]:
        stmt = (
            select(TopArtist)
            .where(TopArtist.user_id == user_id)
            .order_by(TopArtist.slot)
            .limit(limit)
        )
        rows = await self._scalars("top_artists", user_id, stmt)
        return [_artist_to_result(r) for r in rows]

    async def query_playlists(self, user_id: str) -> list[PlaylistResult]:
        stmt = (
            select(Playlist)
            .where(Playlist.user_id == user_id)
            .order_by(Playlist.created_at, Playlist.id)
        )
        rows = await self._scalars("playlists", user_id, stmt)
        return [_playlist_to_result(r) for r in rows]

    async def query_top_tracks(self, user_id: str, limit: int) -> list[TrackResult]:
        stmt = (
            select(TopTrack)
            .where(TopTrack.user_id == user_id)
            .order_by(TopTrack.slot)
            .limit(limit)
        )
        rows = await self._scalars("top_tracks", user_id, stmt)
        return [_track_to_result(r) for r in rows]

    async def query_selected_tracks(self, user_id: str) -> list[TrackResult]:
        stmt = (
            select(SelectedTrack)
            .where(SelectedTrack.user_id == user_id)
            .order_by(SelectedTrack.slot)
        )
        rows = await self._scalars("selected_tracks", user_id, stmt)
        return [_track_to_result(r) for r in rows]

    async def query_profile(self, user_id: str) -> ProfileResult | None:
        stmt = select(Profile).where(Profile.id == user_id)
        rows = await self._scalars("profiles", user_id, stmt)
        return _profile_to_result(rows[0]) if rows else None

    async def get_stored_refresh_token(self, user_id: str) -> str | None:
        """Return profiles.refresh_token for user_id (None when missing or empty)."""
        stmt = select(Profile.refresh_token).where(Profile.id == user_id)
        rows = await self._scalars("profiles.refresh_token", user_id, stmt)
        return rows[0] if rows and rows[0] else None
