"""
Coordinate-keyed TTL cache for normalized irradiance results.

Entries are keyed by latitude and longitude each rounded to 2 decimal places,
so nearby requests (within roughly a kilometre) share one entry. Every store
implements the async :class:`CacheStore` protocol so the fetcher works the
same against the in-process store and the Redis store.

Caching is best-effort: ``set`` reports failure by returning ``False`` and
never raises for a full store.

Operations:
- get(lat, lon): Live entry for the bucket, or None.
- set(lat, lon, data): Store with the configured TTL, overwriting.
- clear(): Drop every entry.
- stats(): Key count plus hit/miss counters.

CHANGELOG:
- 2026-10-15: Bound capacity with max_entries (STORY-006)
- 2026-10-13: Extract CacheStore protocol for the Redis backend (STORY-005)
- 2026-10-12: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from solar_potential.config import DEFAULT_CACHE_TTL_S, MAX_SWEEP_INTERVAL_S
from solar_potential.models import CacheStats, NormalizedSolarData

logger = logging.getLogger(__name__)

KEY_PREFIX = "solar_"


def _round_half_up(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def coordinate_key(lat: float, lon: float) -> str:
    """Build the cache key for a coordinate pair.

    Both values are rounded half-up to 2 decimal places. Two pairs that round
    to the same values always produce the same key.

    Args:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.

    Returns:
        str: Key such as ``solar_28.61_77.21``.
    """
    return f"{KEY_PREFIX}{_round_half_up(lat):.2f}_{_round_half_up(lon):.2f}"


class CacheStore(Protocol):
    """Interface shared by all irradiance cache backends."""

    def start(self) -> None: ...

    async def get(self, lat: float, lon: float) -> NormalizedSolarData | None: ...

    async def set(self, lat: float, lon: float, data: NormalizedSolarData) -> bool: ...

    async def clear(self) -> None: ...

    async def stats(self) -> CacheStats: ...

    async def close(self) -> None: ...


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: NormalizedSolarData
    expires_at: float


class MemoryCacheStore:
    """In-process TTL store safe for concurrent requests.

    Expired entries are dropped lazily when read and periodically by a
    background sweep task. Call :meth:`start` once an event loop is running
    and :meth:`close` at shutdown.

    Args:
        ttl_s: Seconds an entry stays valid (default 86400).
        max_entries: Maximum number of live entries.
        sweep_interval_s: Seconds between expiry sweeps (1-600).
        clock: Monotonic time source, injectable for tests.

    Usage::

        store = MemoryCacheStore(ttl_s=86400)
        store.start()
        await store.set(28.61, 77.21, data)
        cached = await store.get(28.614, 77.209)
        await store.close()
    """

    def __init__(
        self,
        ttl_s: int = DEFAULT_CACHE_TTL_S,
        max_entries: int = 10000,
        sweep_interval_s: float = MAX_SWEEP_INTERVAL_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be > 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        if sweep_interval_s <= 0 or sweep_interval_s > MAX_SWEEP_INTERVAL_S:
            raise ValueError(
                f"sweep_interval_s must be in (0, {MAX_SWEEP_INTERVAL_S}]"
            )
        self._ttl_s = ttl_s
        self._max_entries = max_entries
        self._sweep_interval_s = sweep_interval_s
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
        self._sweep_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the background expiry sweep on the running event loop."""
        if self._sweep_task is None:
            self._sweep_task = asyncio.get_running_loop().create_task(
                self._sweep_loop()
            )

    async def close(self) -> None:
        """Stop the sweep task. Entries are kept until the store is dropped."""
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get(self, lat: float, lon: float) -> NormalizedSolarData | None:
        """Return the live entry for the coordinate bucket, or None."""
        key = coordinate_key(lat, lon)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at <= self._clock():
                del self._entries[key]
                entry = None
            if entry is None:
                self._misses += 1
                logger.debug("Cache MISS for location: %s, %s", lat, lon)
                return None
            self._hits += 1
        logger.debug("Cache HIT for location: %s, %s", lat, lon)
        return entry.value

    async def set(self, lat: float, lon: float, data: NormalizedSolarData) -> bool:
        """Store *data* for the coordinate bucket with the configured TTL.

        Returns:
            bool: ``False`` when the store is full of live entries.
        """
        key = coordinate_key(lat, lon)
        async with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._purge_expired()
                if len(self._entries) >= self._max_entries:
                    logger.warning(
                        "Cache full (%d entries), not storing %s",
                        len(self._entries),
                        key,
                    )
                    return False
            self._entries[key] = CacheEntry(
                key=key,
                value=data,
                expires_at=self._clock() + self._ttl_s,
            )
        return True

    async def clear(self) -> None:
        """Drop every entry and reset the counters."""
        async with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("Cache cleared")

    async def stats(self) -> CacheStats:
        async with self._lock:
            return CacheStats(
                keys=len(self._entries),
                hits=self._hits,
                misses=self._misses,
            )

    async def sweep(self) -> int:
        """Remove expired entries now.

        Returns:
            int: Number of entries removed.
        """
        async with self._lock:
            return self._purge_expired()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _purge_expired(self) -> int:
        """Delete expired entries. Caller must hold the lock."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval_s)
            try:
                removed = await self.sweep()
            except Exception:
                logger.warning("Cache sweep failed", exc_info=True)
                continue
            if removed:
                logger.debug("Cache sweep removed %d expired entries", removed)
