"""Pytest configuration and fixtures for the TuneTribe backend.

Uses app.main:app for HTTP tests. Redis and Postgres are replaced by an
in-memory cache and an AsyncMock record source through
app.dependency_overrides; DB-dependent fixtures skip when DATABASE_URL is
not set.
"""

import os

# Settings are read when app.main is imported; pin a test configuration first.
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import AsyncIterator, Iterator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.api.dependencies import get_cache, get_record_source  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.persistence import database  # noqa: E402
from app.infrastructure.persistence.repositories.record_source import SqlRecordSource  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import InMemoryCache  # noqa: E402


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def record_source() -> AsyncMock:
    """AsyncMock record source; every query returns an empty result by default."""
    source = AsyncMock(spec=SqlRecordSource)
    source.query_prompts.return_value = []
    source.query_top_artists.return_value = []
    source.query_playlists.return_value = []
    source.query_top_tracks.return_value = []
    source.query_selected_tracks.return_value = []
    source.query_profile.return_value = None
    source.get_stored_refresh_token.return_value = None
    return source


@pytest.fixture(autouse=True)
def _rate_limits_off() -> Iterator[None]:
    """Rate limits share one in-memory counter per client address; off unless a test enables them."""
    limiter.enabled = False
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI). Clears overrides afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def wired(cache: InMemoryCache, record_source: AsyncMock) -> tuple[InMemoryCache, AsyncMock]:
    """Route the app's cache and record source to the in-memory fakes."""
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_record_source] = lambda: record_source
    return cache, record_source


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for record-source integration tests. Rolls back after test.

    Skips when DATABASE_URL is not set. Use @pytest.mark.requires_db to mark
    tests that need this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL to a database with the TuneTribe schema")
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
