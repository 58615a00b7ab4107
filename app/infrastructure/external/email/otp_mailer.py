"""Password-reset OTP delivery over SMTP (SSL).

smtplib is blocking; sends run in a worker thread (asyncio.to_thread) so
the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from app.domain.exceptions import EmailDeliveryException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

OTP_SUBJECT = "Password Reset OTP"


def build_otp_message(sender_name: str, sender: str, recipient: str, otp: str, ttl_seconds: int) -> EmailMessage:
    """Build the OTP email (plain text)."""
    minutes = max(1, ttl_seconds // 60)
    message = EmailMessage()
    message["From"] = formataddr((sender_name, sender))
    message["To"] = recipient
    message["Subject"] = OTP_SUBJECT
    message.set_content(f"Your OTP is {otp}. It is valid for {minutes} minutes.")
    return message


class SmtpOtpMailer:
    """Sends OTP emails through an SMTP-over-SSL relay (e.g. Gmail). Implements IOtpMailer."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender_name: str,
        ttl_seconds: int,
        timeout: float,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender_name = sender_name
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout

    async def send_otp(self, email: str, otp: str) -> None:
        """Send the OTP; raise EmailDeliveryException on any SMTP/network failure."""
        if not self.username or not self.password:
            raise EmailDeliveryException("email sender not configured")
        message = build_otp_message(self.sender_name, self.username, email, otp, self.ttl_seconds)
        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("OTP email delivery failed: %s", type(e).__name__)
            raise EmailDeliveryException(type(e).__name__) from e
        logger.info("OTP email sent via %s", self.host)

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.login(self.username, self.password)
            smtp.send_message(message)
