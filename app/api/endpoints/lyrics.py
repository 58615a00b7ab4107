"""Lyrics API: proxy to the public lyrics search service."""

from typing import Any

from fastapi import APIRouter, Depends

from app.api.dependencies import get_lyrics_client
from app.infrastructure.external.lyrics.client import LyricsClient

router = APIRouter()


@router.get("/lyrics")
async def get_lyrics(
    title: str | None = None,
    artist: str | None = None,
    client: LyricsClient = Depends(get_lyrics_client),
) -> Any:
    """Search lyrics by title and optional artist; returns the upstream JSON unchanged."""
    return await client.search(title=title, artist=artist)
