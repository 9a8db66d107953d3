"""
Cache package.

Exports the coordinate-keyed cache stores and the factory that picks one
from the service settings.

CHANGELOG:
- 2026-10-13: Add build_cache_store factory (STORY-005)
- 2026-10-12: Initial creation (STORY-004)

TODO:
- None
"""

from solar_potential.cache.redis_client import RedisCacheStore, create_redis
from solar_potential.cache.store import (
    CacheStore,
    MemoryCacheStore,
    coordinate_key,
)
from solar_potential.config import Settings


def build_cache_store(settings: Settings) -> CacheStore:
    """Construct the cache store selected by ``settings.cache_backend``."""
    if settings.cache_backend == "redis":
        return RedisCacheStore(
            create_redis(settings.redis_url),
            ttl_s=settings.cache_ttl_s,
        )
    return MemoryCacheStore(
        ttl_s=settings.cache_ttl_s,
        max_entries=settings.cache_max_entries,
        sweep_interval_s=settings.cache_sweep_interval_s,
    )


__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
    "coordinate_key",
]
