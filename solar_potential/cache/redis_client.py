"""
Redis-backed irradiance cache.

Stores each NormalizedSolarData as JSON under its coordinate key with
``SET key value EX ttl``, so Redis handles expiry. Every operation is
best-effort: connection or command failures are logged but do not propagate
exceptions, and the request path falls back to the provider.

CHANGELOG:
- 2026-10-13: Initial creation from the realtime cache helpers (STORY-005)

TODO:
- None
"""

import logging

import redis.asyncio as redis
from pydantic import ValidationError

from solar_potential.cache.store import KEY_PREFIX, coordinate_key
from solar_potential.config import DEFAULT_CACHE_TTL_S
from solar_potential.models import CacheStats, NormalizedSolarData

logger = logging.getLogger(__name__)


def create_redis(url: str) -> redis.Redis:
    """Create an async Redis client for *url*.

    Args:
        url: Redis connection URL, e.g. ``redis://localhost:6379/0``.

    Returns:
        redis.Redis: Async Redis client.
    """
    return redis.from_url(url)


class RedisCacheStore:
    """Irradiance cache stored in Redis.

    Hit and miss counters are kept per process; the key count is read from
    Redis on demand.

    Args:
        client: Async Redis client. The store owns it and closes it in
            :meth:`close`.
        ttl_s: Seconds an entry stays valid.
    """

    def __init__(self, client: redis.Redis, ttl_s: int = DEFAULT_CACHE_TTL_S) -> None:
        self._client = client
        self._ttl_s = ttl_s
        self._hits = 0
        self._misses = 0

    def start(self) -> None:
        """No-op: Redis expires keys itself."""

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, lat: float, lon: float) -> NormalizedSolarData | None:
        """Return the cached entry for the bucket, or None on miss or failure."""
        key = coordinate_key(lat, lon)
        try:
            cached = await self._client.get(key)
        except Exception:
            logger.warning(
                "Redis read failed for key %s, falling back to provider",
                key,
                exc_info=True,
            )
            self._misses += 1
            return None

        if cached is None:
            self._misses += 1
            logger.debug("Cache MISS for location: %s, %s", lat, lon)
            return None

        try:
            data = NormalizedSolarData.model_validate_json(cached)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry %s", key, exc_info=True)
            self._misses += 1
            return None

        self._hits += 1
        logger.debug("Cache HIT for location: %s, %s", lat, lon)
        return data

    async def set(self, lat: float, lon: float, data: NormalizedSolarData) -> bool:
        """Store *data* with the configured TTL.

        Returns:
            bool: ``False`` if Redis rejected the write or was unreachable.
        """
        key = coordinate_key(lat, lon)
        try:
            await self._client.set(
                key,
                data.model_dump_json(by_alias=True),
                ex=self._ttl_s,
            )
        except Exception:
            logger.warning("Redis write failed for key %s", key, exc_info=True)
            return False
        return True

    async def clear(self) -> None:
        """Delete every irradiance key (those with the ``solar_`` prefix)."""
        try:
            keys = [key async for key in self._client.scan_iter(match=f"{KEY_PREFIX}*")]
            if keys:
                await self._client.delete(*keys)
        except Exception:
            logger.warning("Redis clear failed", exc_info=True)
            return
        self._hits = 0
        self._misses = 0
        logger.info("Cache cleared (%d keys)", len(keys))

    async def stats(self) -> CacheStats:
        try:
            keys = 0
            async for _ in self._client.scan_iter(match=f"{KEY_PREFIX}*"):
                keys += 1
        except Exception:
            logger.warning("Redis key count failed", exc_info=True)
            keys = -1
        return CacheStats(keys=keys, hits=self._hits, misses=self._misses)
