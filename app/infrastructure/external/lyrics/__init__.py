"""Lyrics search integration."""

from app.infrastructure.external.lyrics.client import LyricsClient

__all__ = ["LyricsClient"]
