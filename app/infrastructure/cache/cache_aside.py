"""Cache-aside read/populate/invalidate over the key-value cache.

One implementation for every resource kind: look up <kind>:<user_id>;
on a hit deserialize and return; on a miss run the loader, serialize the
complete result, store it with the TTL and return it. Failed loads are
never cached. An empty list is a valid cached value.

Concurrent misses for the same key may both load and both write (last
writer wins). An invalidate that lands between a slow load and its write
can leave that write in place until the TTL expires.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from app.application.interfaces.services import ICacheService
from app.domain.enums import ResourceKind
from app.domain.exceptions import CacheUnavailableException, SourceQueryFailedException
from app.infrastructure.cache.keys import resource_key
from app.shared.telemetry.tracing import add_span_attributes

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheAside:
    """Generic cache-aside handler parameterized by kind, loader and serializer.

    cache may be None (Redis disabled): every fetch then goes to the loader
    and invalidation is a no-op.
    """

    def __init__(
        self,
        cache: ICacheService | None,
        ttl: int,
        source_timeout: float,
    ) -> None:
        self.cache = cache
        self.ttl = ttl
        self.source_timeout = source_timeout

    async def fetch(
        self,
        kind: ResourceKind,
        user_id: str,
        loader: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        """Return the cached value for (kind, user_id), loading and caching it on a miss.

        Args:
            kind: Resource kind (key prefix).
            user_id: Non-empty user identifier.
            loader: Zero-arg coroutine factory querying the record source.
            adapter: Pydantic TypeAdapter used to serialize/deserialize T.

        Returns:
            The cached or freshly loaded value.

        Raises:
            SourceQueryFailedException: Loader failed or exceeded source_timeout.
        """
        key = resource_key(kind, user_id)
        if self.cache is not None:
            cached = await self.cache.get(key)
            if cached is not None:
                try:
                    value = adapter.validate_json(cached)
                except ValidationError:
                    logger.warning("Discarding unreadable cache entry %s", key)
                else:
                    add_span_attributes(**{"cache.kind": kind.value, "cache.hit": True})
                    return value
        add_span_attributes(**{"cache.kind": kind.value, "cache.hit": False})

        result = await self._load(kind, user_id, loader)

        if self.cache is not None:
            payload = adapter.dump_json(result).decode("utf-8")
            if not await self.cache.set(key, payload, self.ttl):
                logger.warning("Serving %s for user %s uncached (cache write failed)", kind.value, user_id)
        return result

    async def invalidate(self, kind: ResourceKind, user_id: str) -> None:
        """Delete the cached value for (kind, user_id); absent keys are fine.

        Raises:
            CacheUnavailableException: The cache store could not be reached.
        """
        key = resource_key(kind, user_id)
        if self.cache is None:
            return
        if not await self.cache.delete(key):
            raise CacheUnavailableException("invalidate", key)
        logger.info("Invalidated %s cache for user %s", kind.value, user_id)

    async def _load(
        self,
        kind: ResourceKind,
        user_id: str,
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        try:
            return await asyncio.wait_for(loader(), timeout=self.source_timeout)
        except TimeoutError:
            logger.error(
                "Record source timed out after %ss for %s user %s",
                self.source_timeout,
                kind.value,
                user_id,
            )
            raise SourceQueryFailedException(kind.value, user_id, "timeout") from None
