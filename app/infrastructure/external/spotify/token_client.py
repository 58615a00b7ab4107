"""Spotify Accounts token endpoint client: authorization-code (PKCE) and refresh grants."""

from __future__ import annotations

from typing import Any, ClassVar

import httpx

from app.domain.exceptions import ProviderException, ProviderUnavailableException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    """Return the JSON body, or {"error": <text>} when the provider did not send JSON."""
    try:
        return response.json()
    except ValueError:
        return {"error": response.text or response.reason_phrase}


class SpotifyTokenClient:
    """Form-encoded token requests authenticated with HTTP Basic client credentials.

    Implements ISpotifyTokenClient. Successful payloads are returned verbatim;
    non-2xx responses raise ProviderException carrying the provider's status
    and body; transport errors raise ProviderUnavailableException.
    """

    PROVIDER_NAME: ClassVar[str] = "spotify"
    _SENSITIVE_KEYS: ClassVar[frozenset[str]] = frozenset(
        {"access_token", "refresh_token", "id_token"}
    )

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout: float,
    ) -> None:
        self.http_client = http_client
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.timeout = timeout

    async def exchange_authorization_code(
        self,
        code: str,
        code_verifier: str | None,
        redirect_uri: str | None,
    ) -> dict[str, Any]:
        """Exchange an authorization code (with PKCE verifier) for tokens."""
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self.client_id,
            "code_verifier": code_verifier,
        }
        return await self._post_grant("token exchange", data)

    async def refresh_access_token(self, refresh_token: str) -> dict[str, Any]:
        """Run the refresh_token grant."""
        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self.client_id,
        }
        return await self._post_grant("token refresh", data)

    async def _post_grant(self, operation: str, data: dict[str, str | None]) -> dict[str, Any]:
        form = {k: v for k, v in data.items() if v is not None}
        try:
            response = await self.http_client.post(
                self.token_url,
                data=form,
                auth=httpx.BasicAuth(self.client_id, self.client_secret),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", self.PROVIDER_NAME, operation, type(e).__name__)
            raise ProviderUnavailableException(self.PROVIDER_NAME, type(e).__name__) from e
        body = _decode_body(response)
        if not response.is_success:
            logger.error(
                "%s %s failed: status=%d error=%s",
                self.PROVIDER_NAME,
                operation,
                response.status_code,
                body.get("error") if isinstance(body, dict) else None,
            )
            raise ProviderException(response.status_code, body)
        logger.info(
            "%s %s succeeded: %s",
            self.PROVIDER_NAME,
            operation,
            self._safe_metadata(body),
        )
        return body

    def _safe_metadata(self, body: Any) -> dict[str, Any]:
        """Token response without secrets, for logging."""
        if not isinstance(body, dict):
            return {}
        return {k: v for k, v in body.items() if k not in self._SENSITIVE_KEYS}
