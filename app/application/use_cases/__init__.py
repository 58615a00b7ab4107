"""Application use cases: one entry point per workflow."""

from app.application.use_cases.password_reset import PasswordResetService
from app.application.use_cases.resources import ResourceService
from app.application.use_cases.spotify_auth import SpotifyAuthService

__all__ = [
    "PasswordResetService",
    "ResourceService",
    "SpotifyAuthService",
]
