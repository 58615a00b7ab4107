"""Pydantic request/response schemas for the API."""

from app.schemas.auth import RefreshTokenRequest, SpotifyAuthRequest
from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.password_reset import OtpRequest, OtpStatusResponse, OtpVerifyRequest

__all__ = [
    "HealthResponse",
    "OtpRequest",
    "OtpStatusResponse",
    "OtpVerifyRequest",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "RefreshTokenRequest",
    "SpotifyAuthRequest",
]
