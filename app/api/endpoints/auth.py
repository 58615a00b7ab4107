"""Spotify token API: authorization-code exchange and token refresh.

Both routes return the provider's JSON payload verbatim; provider
rejections are passed through with the provider's status code.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_spotify_auth_service
from app.application.use_cases.spotify_auth import SpotifyAuthService
from app.core.limiter import limit_token_exchange, limit_token_refresh
from app.schemas.auth import RefreshTokenRequest, SpotifyAuthRequest

router = APIRouter()


@router.post("/spotify-auth")
@limit_token_exchange
async def spotify_auth(
    request: Request,
    body: SpotifyAuthRequest | None = None,
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
) -> dict[str, Any]:
    """Exchange a one-time authorization code (PKCE) for access and refresh tokens.

    A code is accepted once; reuse returns 400 without contacting Spotify.
    """
    body = body or SpotifyAuthRequest()
    return await service.exchange_code(
        code=body.code,
        code_verifier=body.code_verifier,
        redirect_uri=body.redirect_uri,
    )


@router.post("/refresh-token")
@limit_token_refresh
async def refresh_token(
    request: Request,
    body: RefreshTokenRequest | None = None,
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
) -> dict[str, Any]:
    """Exchange a refresh token for a new access token."""
    body = body or RefreshTokenRequest()
    return await service.refresh_token(
        refresh_token=body.refresh_token,
        user_id=body.user_id,
    )
