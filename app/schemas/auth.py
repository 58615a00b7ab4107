"""Spotify token API schemas.

Fields are optional at the schema level so a missing code or token is
reported as a 400 by the use case rather than a 422.
"""

from pydantic import BaseModel, Field


class SpotifyAuthRequest(BaseModel):
    """Request body for POST /spotify-auth (authorization code + PKCE)."""

    code: str | None = Field(default=None, description="Authorization code from the redirect")
    code_verifier: str | None = Field(default=None, description="PKCE code verifier")
    redirect_uri: str | None = Field(default=None, description="Redirect URI used in the authorize step")


class RefreshTokenRequest(BaseModel):
    """Request body for POST /refresh-token."""

    refresh_token: str | None = Field(default=None, description="Refresh token to exchange")
    user_id: str | None = Field(
        default=None,
        description="When set, the refresh token stored on this user's profile is used",
    )
