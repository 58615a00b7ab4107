"""Tests for the password-reset OTP routes."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.api.dependencies import get_password_reset_service
from app.application.use_cases.password_reset import PasswordResetService
from app.core.limiter import limiter
from app.domain.exceptions import EmailDeliveryException
from app.main import app
from tests.fakes import InMemoryCache


def _wire(cache: InMemoryCache) -> AsyncMock:
    mailer = AsyncMock()
    service = PasswordResetService(cache, mailer, otp_ttl=300)
    app.dependency_overrides[get_password_reset_service] = lambda: service
    return mailer


async def test_request_then_verify(client: AsyncClient, cache: InMemoryCache) -> None:
    mailer = _wire(cache)

    sent = await client.post("/api/password-reset/request-otp", json={"email": "fan@example.com"})
    otp = mailer.send_otp.await_args.args[1]
    verified = await client.post(
        "/api/password-reset/verify-otp", json={"email": "fan@example.com", "otp": otp}
    )
    replayed = await client.post(
        "/api/password-reset/verify-otp", json={"email": "fan@example.com", "otp": otp}
    )

    assert sent.status_code == 202
    assert sent.json() == {"status": "sent"}
    assert verified.status_code == 200
    assert verified.json() == {"status": "verified"}
    assert replayed.status_code == 400
    assert replayed.json()["error"] == "INVALID_OTP"


async def test_missing_email_is_400(client: AsyncClient, cache: InMemoryCache) -> None:
    _wire(cache)

    response = await client.post("/api/password-reset/request-otp", json={})

    assert response.status_code == 400


async def test_email_failure_is_502(client: AsyncClient, cache: InMemoryCache) -> None:
    mailer = _wire(cache)
    mailer.send_otp.side_effect = EmailDeliveryException("SMTPAuthenticationError")

    response = await client.post("/api/password-reset/request-otp", json={"email": "fan@example.com"})

    assert response.status_code == 502
    assert response.json()["error"] == "EMAIL_DELIVERY_FAILED"


async def test_otp_requests_are_rate_limited(client: AsyncClient, cache: InMemoryCache) -> None:
    _wire(cache)
    limiter.enabled = True
    limiter.reset()

    statuses = [
        (await client.post("/api/password-reset/request-otp", json={"email": "fan@example.com"})).status_code
        for _ in range(6)
    ]

    assert statuses == [202] * 5 + [429]
