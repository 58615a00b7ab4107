"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (HTTP client, cache, replay
guard, DB engine, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.application.services.replay_guard import ReplayGuard
from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client, replay guard, Redis cache (if
    enabled), SQL engine instrumentation (if configured). Shutdown order:
    HTTP client close, cache disconnect, telemetry shutdown, SQL engine
    dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for the token endpoint and the lyrics API (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.oauth_timeout_seconds)
    app.state.replay_guard = ReplayGuard()

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        logger.info("Redis disabled; resources are served straight from the database")
        app.state.cache = None

    telemetry = get_telemetry()
    engine = database.get_engine()
    if telemetry is not None and engine is not None:
        telemetry.instrument_sqlalchemy(engine)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
