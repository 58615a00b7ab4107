"""Spotify integration: token endpoint client."""

from app.infrastructure.external.spotify.token_client import SpotifyTokenClient

__all__ = ["SpotifyTokenClient"]
