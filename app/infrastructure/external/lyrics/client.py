"""Lyrics search API client (title + optional artist)."""

from __future__ import annotations

from typing import Any

import httpx

from app.domain.exceptions import LyricsFetchException, ValidationException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LyricsClient:
    """Proxies lyrics searches; returns the upstream JSON unchanged."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, timeout: float) -> None:
        self.http_client = http_client
        self.base_url = base_url
        self.timeout = timeout

    async def search(self, title: str | None, artist: str | None = None) -> Any:
        """Search lyrics by title (required) and artist (optional).

        Raises:
            ValidationException: title is missing.
            LyricsFetchException: Upstream unreachable, timed out, or returned non-JSON.
        """
        if not title:
            raise ValidationException("Missing title", field="title")
        params = {"title": title}
        if artist:
            params["artist"] = artist
        logger.info("Lyrics search title=%r artist=%r", title, artist)
        try:
            response = await self.http_client.get(
                self.base_url, params=params, timeout=self.timeout
            )
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Lyrics search failed: %s", type(e).__name__)
            raise LyricsFetchException(type(e).__name__) from e
