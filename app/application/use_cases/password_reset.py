"""Password-reset OTP use case: issue a short-lived code by email and verify it once."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

from app.domain.exceptions import (
    CacheUnavailableException,
    InvalidOtpException,
    ValidationException,
)
from app.infrastructure.cache.keys import otp_key
from app.shared.utils.generators import generate_otp

if TYPE_CHECKING:
    from app.application.interfaces.services import ICacheService, IOtpMailer

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Stores OTPs in the cache (TTL) and delivers them through the mailer."""

    def __init__(
        self,
        cache: "ICacheService | None",
        mailer: "IOtpMailer",
        otp_ttl: int,
    ) -> None:
        self.cache = cache
        self.mailer = mailer
        self.otp_ttl = otp_ttl

    async def request_otp(self, email: str | None) -> None:
        """Generate, store and email a new OTP, replacing any pending one."""
        key = self._key(email)
        if self.cache is None:
            raise CacheUnavailableException("store_otp", key)
        otp = generate_otp()
        if not await self.cache.set(key, otp, self.otp_ttl):
            raise CacheUnavailableException("store_otp", key)
        try:
            await self.mailer.send_otp(email.strip(), otp)
        except Exception:
            # An undelivered code must not stay redeemable.
            await self.cache.delete(key)
            raise
        logger.info("Password reset OTP issued (ttl=%ss)", self.otp_ttl)

    async def verify_otp(self, email: str | None, otp: str | None) -> None:
        """Accept the OTP once; raise InvalidOtpException if wrong or expired."""
        key = self._key(email)
        if not otp:
            raise ValidationException("OTP is required", field="otp")
        if self.cache is None:
            raise CacheUnavailableException("verify_otp", key)
        expected = await self.cache.get(key)
        if expected is None or not secrets.compare_digest(expected, otp.strip()):
            raise InvalidOtpException()
        if not await self.cache.delete(key):
            raise CacheUnavailableException("consume_otp", key)

    @staticmethod
    def _key(email: str | None) -> str:
        if not email or not email.strip():
            raise ValidationException("Email is required", field="email")
        try:
            return otp_key(email)
        except ValueError as e:
            raise ValidationException(str(e), field="email") from e
