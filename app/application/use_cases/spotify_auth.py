"""Spotify OAuth use cases: authorization-code exchange (replay-protected) and refresh."""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Any

from app.domain.exceptions import (
    CodeAlreadyUsedException,
    MissingRefreshTokenException,
    ValidationException,
)
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.interfaces.record_source import IRecordSource
    from app.application.interfaces.services import ISpotifyTokenClient
    from app.application.services.replay_guard import ReplayGuard

logger = logging.getLogger(__name__)


def code_fingerprint(code: str) -> str:
    """Short, non-reversible tag for logging an authorization code."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()[:12]


class SpotifyAuthService:
    """Token exchange and refresh against the OAuth provider."""

    def __init__(
        self,
        token_client: "ISpotifyTokenClient",
        replay_guard: "ReplayGuard",
        record_source: "IRecordSource | None" = None,
    ) -> None:
        self.token_client = token_client
        self.replay_guard = replay_guard
        self.record_source = record_source

    @traced("spotify_auth.exchange")
    async def exchange_code(
        self,
        code: str | None,
        code_verifier: str | None,
        redirect_uri: str | None,
    ) -> dict[str, Any]:
        """Exchange an authorization code for tokens exactly once.

        Raises:
            ValidationException: code is missing.
            CodeAlreadyUsedException: code was already exchanged or is being exchanged;
                the provider is not contacted.
            ProviderException: Provider rejected the exchange; code stays usable.
        """
        if not code:
            raise ValidationException("Code is required", field="code")
        fingerprint = code_fingerprint(code)
        try:
            async with self.replay_guard.claim(code):
                tokens = await self.token_client.exchange_authorization_code(
                    code, code_verifier, redirect_uri
                )
        except CodeAlreadyUsedException:
            state = "already exchanged" if self.replay_guard.is_used(code) else "exchange in flight"
            logger.warning("Authorization code reuse detected: %s (%s)", fingerprint, state)
            raise
        except Exception:
            logger.warning("Authorization code %s not exchanged; released for retry", fingerprint)
            raise
        logger.info("Authorization code %s exchanged", fingerprint)
        return tokens

    @traced("spotify_auth.refresh")
    async def refresh_token(
        self,
        refresh_token: str | None,
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """Refresh an access token (stateless passthrough).

        When user_id is given and a record source is configured, the refresh
        token stored on the user's profile is used instead of the supplied one.

        Raises:
            ValidationException: refresh_token is missing.
            MissingRefreshTokenException: No stored refresh token for user_id.
            ProviderException: Provider rejected the refresh.
        """
        if not refresh_token:
            raise ValidationException("Refresh token is required", field="refresh_token")
        token = refresh_token
        if user_id and self.record_source is not None:
            token = await self.record_source.get_stored_refresh_token(user_id)
            if not token:
                raise MissingRefreshTokenException(user_id)
        return await self.token_client.refresh_access_token(token)
