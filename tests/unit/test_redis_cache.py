"""Tests for CacheService over a mocked redis.asyncio client."""

from unittest.mock import AsyncMock

import redis.asyncio as redis

from app.core.config import Settings
from app.infrastructure.cache.redis_cache import CacheService


async def _connected(client: AsyncMock) -> CacheService:
    service = CacheService(redis_client=client)
    await service.connect()
    return service


async def test_connect_pings_injected_client() -> None:
    client = AsyncMock()

    service = await _connected(client)

    client.ping.assert_awaited_once()
    assert service.is_available()


async def test_connect_failure_leaves_cache_unavailable() -> None:
    client = AsyncMock()
    client.ping.side_effect = redis.ConnectionError("refused")

    service = await _connected(client)

    assert not service.is_available()
    assert await service.get("user-prompts:u1") is None
    assert await service.set("user-prompts:u1", "[]", 3600) is False
    assert await service.delete("user-prompts:u1") is False


async def test_get_hit_and_miss() -> None:
    client = AsyncMock()
    client.get.side_effect = ["[1]", None]
    service = await _connected(client)

    assert await service.get("k") == "[1]"
    assert await service.get("k") is None


async def test_set_is_single_setex() -> None:
    client = AsyncMock()
    service = await _connected(client)

    assert await service.set("selected-tracks:u1", "[]", 3600) is True

    client.setex.assert_awaited_once_with("selected-tracks:u1", 3600, "[]")


async def test_get_degrades_on_connection_error() -> None:
    """Injected clients are not rebuilt; a dropped connection reads as a miss."""
    client = AsyncMock()
    client.get.side_effect = redis.ConnectionError("reset")
    service = await _connected(client)

    assert await service.get("k") is None
    assert not service.is_available()


async def test_delete_reports_failure() -> None:
    client = AsyncMock()
    client.delete.side_effect = redis.TimeoutError("slow")
    service = await _connected(client)

    assert await service.delete("k") is False


async def test_delete_absent_key_succeeds() -> None:
    client = AsyncMock()
    client.delete.return_value = 0
    service = await _connected(client)

    assert await service.delete("k") is True


async def test_ping_and_disconnect() -> None:
    client = AsyncMock()
    client.ping.return_value = True
    service = await _connected(client)

    assert await service.ping() is True
    await service.disconnect()

    client.aclose.assert_awaited_once()
    assert not service.is_available()


def _owned_service(clients: list[AsyncMock], backoff: float) -> tuple[CacheService, list[AsyncMock]]:
    """CacheService that builds its own clients, handing out ``clients`` in order."""
    settings = Settings(_env_file=None, redis_reconnect_backoff_seconds=backoff)
    service = CacheService(settings=settings)
    built: list[AsyncMock] = []

    def build() -> AsyncMock:
        client = clients[len(built)]
        built.append(client)
        return client

    service._build_client = build  # type: ignore[method-assign]
    return service, built


async def test_cache_recovers_after_startup_outage() -> None:
    """Redis down at startup, back later: the next command rebuilds the client."""
    down = AsyncMock()
    down.ping.side_effect = redis.ConnectionError("refused")
    up = AsyncMock()
    service, built = _owned_service([down, up], backoff=0)

    await service.connect()
    assert not service.is_available()

    assert await service.delete("user-profile:u1") is True
    assert built == [down, up]
    up.delete.assert_awaited_once_with("user-profile:u1")
    assert service.is_available()


async def test_cache_recovers_after_failed_reconnect() -> None:
    first = AsyncMock()
    first.get.side_effect = redis.ConnectionError("reset")
    down = AsyncMock()
    down.ping.side_effect = redis.ConnectionError("refused")
    up = AsyncMock()
    up.get.return_value = "[]"
    service, built = _owned_service([first, down, up], backoff=0)
    await service.connect()

    assert await service.get("selected-tracks:u1") is None
    assert await service.get("selected-tracks:u1") == "[]"
    assert built == [first, down, up]


async def test_reconnect_waits_for_backoff() -> None:
    down = AsyncMock()
    down.ping.side_effect = redis.ConnectionError("refused")
    service, built = _owned_service([down, AsyncMock()], backoff=60)
    await service.connect()

    assert await service.delete("user-profile:u1") is False
    assert await service.ping() is False
    assert built == [down]


async def test_no_reconnect_after_disconnect() -> None:
    down = AsyncMock()
    down.ping.side_effect = redis.ConnectionError("refused")
    service, built = _owned_service([down, AsyncMock()], backoff=0)
    await service.connect()
    await service.disconnect()

    assert await service.get("k") is None
    assert built == [down]
