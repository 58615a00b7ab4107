"""Service interfaces (ports) for the application layer.

Protocols define contracts for outbound collaborators (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Protocol for the key-value cache (get, set-with-expiry, delete of text)."""

    def is_available(self) -> bool:
        """Return True if the cache store is reachable."""

    async def get(self, key: str) -> str | None:
        """Return cached text or None."""

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store text with TTL; return False if not stored."""

    async def delete(self, key: str) -> bool:
        """Delete key; return False if the store could not be reached."""

    async def ping(self) -> bool:
        """Return True if the store answers a liveness check."""


class ISpotifyTokenClient(Protocol):
    """Protocol for the OAuth provider's token endpoint."""

    async def exchange_authorization_code(
        self, code: str, code_verifier: str | None, redirect_uri: str | None
    ) -> dict[str, Any]:
        """Trade an authorization code (PKCE) for tokens; return the payload verbatim."""

    async def refresh_access_token(self, refresh_token: str) -> dict[str, Any]:
        """Run the refresh grant; return the payload verbatim."""


class IOtpMailer(Protocol):
    """Protocol for delivering password-reset OTP emails."""

    async def send_otp(self, email: str, otp: str) -> None:
        """Send otp to email; raise EmailDeliveryException on failure."""
