"""Tests for CacheAside: hit/miss/populate, failed loads, degraded cache, invalidation."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from pydantic import TypeAdapter

from app.application.dtos.resources import PromptResult, TrackResult
from app.domain.enums import ResourceKind
from app.domain.exceptions import CacheUnavailableException, SourceQueryFailedException
from app.infrastructure.cache.cache_aside import CacheAside
from tests.fakes import InMemoryCache

PROMPTS = TypeAdapter(list[PromptResult])
TRACKS = TypeAdapter(list[TrackResult])


def _prompts() -> list[PromptResult]:
    return [PromptResult(id="p1", user_id="u1", prompt="Go-to karaoke song?", answer="Dancing Queen")]


async def test_miss_loads_and_stores_with_ttl() -> None:
    """First fetch queries the loader once and writes <kind>:<user_id> with the TTL."""
    cache = InMemoryCache()
    loader = AsyncMock(return_value=_prompts())
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    result = await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)

    assert result == _prompts()
    loader.assert_awaited_once()
    assert "user-prompts:u1" in cache.store
    assert cache.ttls["user-prompts:u1"] == 3600


async def test_second_fetch_is_a_hit_with_identical_value() -> None:
    """Two fetches without invalidation: one loader call, equal results."""
    cache = InMemoryCache()
    loader = AsyncMock(return_value=_prompts())
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    first = await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)
    second = await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)

    assert loader.await_count == 1
    assert PROMPTS.dump_json(first) == PROMPTS.dump_json(second)


async def test_empty_list_is_cached() -> None:
    """An empty result is a valid value and is not re-queried."""
    cache = InMemoryCache()
    loader = AsyncMock(return_value=[])
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    assert await handler.fetch(ResourceKind.SELECTED_TRACKS, "u1", loader, TRACKS) == []
    assert await handler.fetch(ResourceKind.SELECTED_TRACKS, "u1", loader, TRACKS) == []

    assert loader.await_count == 1
    assert cache.store["selected-tracks:u1"] == "[]"


async def test_invalidate_then_fetch_queries_exactly_once() -> None:
    cache = InMemoryCache()
    loader = AsyncMock(return_value=_prompts())
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)
    await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)
    loader.reset_mock()

    await handler.invalidate(ResourceKind.USER_PROMPTS, "u1")
    await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)

    loader.assert_awaited_once()


async def test_invalidate_is_idempotent() -> None:
    """Invalidating an absent key succeeds, repeatedly."""
    cache = InMemoryCache()
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    await handler.invalidate(ResourceKind.USER_PROFILE, "nobody")
    await handler.invalidate(ResourceKind.USER_PROFILE, "nobody")

    assert cache.store == {}


async def test_failed_load_is_not_cached() -> None:
    cache = InMemoryCache()
    loader = AsyncMock(side_effect=SourceQueryFailedException("user-prompts", "u1", "OperationalError"))
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    with pytest.raises(SourceQueryFailedException):
        await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)

    assert cache.store == {}
    assert cache.set_calls == 0


async def test_failed_reload_after_invalidation_leaves_key_absent() -> None:
    """Key is absent after invalidate + failed load (never a partial value)."""
    cache = InMemoryCache()
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)
    await handler.fetch(ResourceKind.USER_PROMPTS, "u1", AsyncMock(return_value=_prompts()), PROMPTS)
    await handler.invalidate(ResourceKind.USER_PROMPTS, "u1")

    failing = AsyncMock(side_effect=SourceQueryFailedException("user-prompts", "u1", "boom"))
    with pytest.raises(SourceQueryFailedException):
        await handler.fetch(ResourceKind.USER_PROMPTS, "u1", failing, PROMPTS)

    assert "user-prompts:u1" not in cache.store


async def test_loader_timeout_raises_source_query_failed() -> None:
    cache = InMemoryCache()

    async def slow() -> list[PromptResult]:
        await asyncio.sleep(1)
        return _prompts()

    handler = CacheAside(cache, ttl=3600, source_timeout=0.01)

    with pytest.raises(SourceQueryFailedException) as exc_info:
        await handler.fetch(ResourceKind.USER_PROMPTS, "u1", slow, PROMPTS)

    assert exc_info.value.details["reason"] == "timeout"
    assert cache.store == {}


async def test_unreachable_cache_degrades_to_loader() -> None:
    """With the store down, every fetch reads through to the loader and still succeeds."""
    cache = InMemoryCache()
    cache.available = False
    loader = AsyncMock(return_value=_prompts())
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    assert await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS) == _prompts()
    assert await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS) == _prompts()

    assert loader.await_count == 2


async def test_unreachable_cache_fails_invalidation() -> None:
    cache = InMemoryCache()
    cache.available = False
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    with pytest.raises(CacheUnavailableException) as exc_info:
        await handler.invalidate(ResourceKind.SPOTIFY_STATS, "u1")

    assert exc_info.value.details["key"] == "spotify-stats:u1"


async def test_no_cache_configured() -> None:
    """cache=None: fetch always loads; invalidation is a no-op."""
    loader = AsyncMock(return_value=[])
    handler = CacheAside(None, ttl=3600, source_timeout=1.0)

    await handler.fetch(ResourceKind.SELECTED_TRACKS, "u1", loader, TRACKS)
    await handler.fetch(ResourceKind.SELECTED_TRACKS, "u1", loader, TRACKS)
    await handler.invalidate(ResourceKind.SELECTED_TRACKS, "u1")

    assert loader.await_count == 2


async def test_unreadable_entry_is_treated_as_miss_and_overwritten() -> None:
    cache = InMemoryCache()
    cache.store["user-prompts:u1"] = "{not json"
    loader = AsyncMock(return_value=_prompts())
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)

    result = await handler.fetch(ResourceKind.USER_PROMPTS, "u1", loader, PROMPTS)

    assert result == _prompts()
    loader.assert_awaited_once()
    assert PROMPTS.validate_json(cache.store["user-prompts:u1"]) == _prompts()


async def test_keys_are_isolated_per_kind_and_user() -> None:
    cache = InMemoryCache()
    handler = CacheAside(cache, ttl=3600, source_timeout=1.0)
    await handler.fetch(ResourceKind.USER_PROMPTS, "u1", AsyncMock(return_value=_prompts()), PROMPTS)
    await handler.fetch(ResourceKind.USER_PROMPTS, "u2", AsyncMock(return_value=[]), PROMPTS)

    await handler.invalidate(ResourceKind.USER_PROMPTS, "u2")

    assert set(cache.store) == {"user-prompts:u1"}
