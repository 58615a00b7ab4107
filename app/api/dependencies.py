"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the shared infrastructure held on app.state
(cache, replay guard, outbound HTTP client) and for the application use
cases built from it. Routes depend only on these, not on infra directly.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.record_source import IRecordSource
from app.application.interfaces.services import ICacheService
from app.application.services.replay_guard import ReplayGuard
from app.application.use_cases.password_reset import PasswordResetService
from app.application.use_cases.resources import ResourceService
from app.application.use_cases.spotify_auth import SpotifyAuthService
from app.core.config import get_settings
from app.domain.exceptions import ProviderUnavailableException
from app.infrastructure.cache.cache_aside import CacheAside
from app.infrastructure.external.email.otp_mailer import SmtpOtpMailer
from app.infrastructure.external.lyrics.client import LyricsClient
from app.infrastructure.external.spotify.token_client import SpotifyTokenClient
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories.record_source import SqlRecordSource


def get_cache(request: Request) -> ICacheService | None:
    """Return the Redis cache service, or None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_replay_guard(request: Request) -> ReplayGuard:
    """Return the process-wide authorization-code guard."""
    guard = getattr(request.app.state, "replay_guard", None)
    if guard is None:
        guard = ReplayGuard()
        request.app.state.replay_guard = guard
    return guard


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the shared outbound HTTP client created in the lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        client = httpx.AsyncClient()
        request.app.state.http_client = client
    return client


async def get_record_source(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IRecordSource:
    """SQL record source on the request's session."""
    return SqlRecordSource(db)


async def get_optional_record_source() -> AsyncIterator[IRecordSource | None]:
    """Record source when DATABASE_URL is set, else None (no 503)."""
    if not get_settings().database_url:
        yield None
        return
    async for session in get_db():
        yield SqlRecordSource(session)


def get_cache_aside(
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> CacheAside:
    settings = get_settings()
    return CacheAside(
        cache,
        ttl=settings.cache_ttl_seconds,
        source_timeout=settings.record_source_timeout_seconds,
    )


def get_resource_service(
    cache_aside: Annotated[CacheAside, Depends(get_cache_aside)],
    record_source: Annotated[IRecordSource, Depends(get_record_source)],
) -> ResourceService:
    return ResourceService(cache_aside, record_source)


def get_token_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> SpotifyTokenClient:
    """Spotify token client; 502 when client credentials are not configured."""
    settings = get_settings()
    if not settings.spotify_client_id:
        raise ProviderUnavailableException("spotify", "client credentials not configured")
    return SpotifyTokenClient(
        http_client,
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret.get_secret_value(),
        token_url=settings.spotify_token_url,
        timeout=settings.oauth_timeout_seconds,
    )


def get_spotify_auth_service(
    token_client: Annotated[SpotifyTokenClient, Depends(get_token_client)],
    replay_guard: Annotated[ReplayGuard, Depends(get_replay_guard)],
    record_source: Annotated[IRecordSource | None, Depends(get_optional_record_source)],
) -> SpotifyAuthService:
    return SpotifyAuthService(token_client, replay_guard, record_source)


def get_lyrics_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> LyricsClient:
    settings = get_settings()
    return LyricsClient(
        http_client,
        base_url=settings.lyrics_api_url,
        timeout=settings.lyrics_timeout_seconds,
    )


def get_password_reset_service(
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> PasswordResetService:
    settings = get_settings()
    mailer = SmtpOtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_password.get_secret_value(),
        sender_name=settings.email_sender_name,
        ttl_seconds=settings.otp_ttl_seconds,
        timeout=settings.smtp_timeout_seconds,
    )
    return PasswordResetService(cache, mailer, otp_ttl=settings.otp_ttl_seconds)
