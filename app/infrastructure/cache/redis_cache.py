"""Redis-based cache store client.

Provides async get / set-with-expiry / delete of string values over
redis.asyncio. Reads degrade to a miss when Redis is unreachable; writes
and deletes report failure instead of raising, and callers decide whether
a failed write matters (invalidation does).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import redis.asyncio as redis

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

Command = Callable[[redis.Redis], Awaitable[Any]]


class CacheUnreachable(Exception):
    """Internal signal: a command could not be delivered to Redis."""


class CacheService:
    """Async Redis client for resource entries and OTP codes.

    Values are opaque serialized text under flat string keys (see
    app.infrastructure.cache.keys). Call connect() at startup and
    disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional pre-built client (tests). An injected
                client is pinged by connect() but never rebuilt on reconnect.
                An owned client is rebuilt on demand once
                redis_reconnect_backoff_seconds have passed since the last failure.
            settings: Connection settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._owns_client = redis_client is None
        self._connected = False
        self._closed = False
        self._retry_at = 0.0

    def _build_client(self) -> redis.Redis:
        s = self.settings
        return redis.Redis(
            host=s.redis_host,
            port=s.redis_port,
            db=s.redis_db,
            username=s.redis_username or None,
            password=s.redis_password.get_secret_value() if s.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=s.redis_socket_timeout,
            socket_timeout=s.redis_socket_timeout,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Open the connection and PING it. On failure the cache is disabled until the next retry."""
        self._closed = False
        if self.redis is None:
            self.redis = self._build_client()
            self._owns_client = True
        try:
            await self.redis.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis at %s:%s unreachable (%s); resource cache disabled",
                self.settings.redis_host,
                self.settings.redis_port,
                e,
            )
            self._connected = False
            self._retry_at = time.monotonic() + self.settings.redis_reconnect_backoff_seconds
            if self._owns_client:
                self.redis = None
            return
        self._connected = True
        logger.info("Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        """Close the connection. Call on app shutdown."""
        self._closed = True
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        if self.redis is None or not self._owns_client:
            self._connected = False
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    async def _ensure_connected(self) -> bool:
        """Rebuild an owned client after an outage, at most once per backoff window."""
        if self.is_available():
            return True
        if self._closed or not self._owns_client or time.monotonic() < self._retry_at:
            return False
        await self.connect()
        return self.is_available()

    async def _execute(self, op: str, key: str, command: Command) -> Any:
        """Run command against the client, reconnecting once on a dropped connection.

        Raises:
            CacheUnreachable: Redis unavailable or the command failed.
        """
        if not await self._ensure_connected() or self.redis is None:
            raise CacheUnreachable(op)
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect() or self.redis is None:
                logger.warning("Cache %s unavailable for key %s (Redis disconnected)", op, key)
                raise CacheUnreachable(op) from None
        except redis.RedisError:
            logger.exception("Cache %s error for key %s", op, key)
            raise CacheUnreachable(op) from None
        try:
            return await command(self.redis)
        except redis.RedisError:
            logger.exception("Cache %s error for key %s after reconnect", op, key)
            raise CacheUnreachable(op) from None

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get(self, key: str) -> str | None:
        """Return cached text, or None on a miss or when Redis is unreachable."""
        try:
            value = await self._execute("get", key, lambda r: r.get(key))
        except CacheUnreachable:
            return None
        logger.debug("Cache %s: %s", "MISS" if value is None else "HIT", key)
        if value is None or isinstance(value, str):
            return value
        return value.decode("utf-8")

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store fully serialized text with a TTL in one SETEX.

        Returns:
            True if stored, False otherwise (nothing partial is ever written).
        """
        try:
            await self._execute("set", key, lambda r: r.setex(key, ttl, value))
        except CacheUnreachable:
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key. Deleting an absent key succeeds.

        Returns:
            True if Redis acknowledged the delete, False if it could not be reached.
        """
        try:
            await self._execute("delete", key, lambda r: r.delete(key))
        except CacheUnreachable:
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def ping(self) -> bool:
        """Return True if Redis answers PING (readiness check)."""
        if not await self._ensure_connected() or self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError:
            return False
