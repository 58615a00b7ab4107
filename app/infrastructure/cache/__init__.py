"""Cache: Redis service, cache-aside handler and cache key utilities.

CacheService uses app.core.config; key format is in keys.py (DRY).
CacheService implements app.application.interfaces.ICacheService.
"""

from app.infrastructure.cache.cache_aside import CacheAside
from app.infrastructure.cache.keys import otp_key, resource_key
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheAside",
    "CacheService",
    "otp_key",
    "resource_key",
]
