"""
Irradiance fetcher: cache lookup, provider request, normalization and cache
population behind a single ``get_solar_data(latitude, longitude)`` call.

The provider is asked for the prior full calendar year so the current year's
incomplete months never bias the average. Transport and status failures are
fatal and propagate as ProviderError; an unparseable body degrades to a
zero-data result that is returned but not cached. Every normalized result from
a readable response is cached, including one with no valid months. Cache
writes are best-effort.

Concurrent misses for the same coordinate bucket each call the provider;
there is no in-flight request coalescing.

CHANGELOG:
- 2026-10-20: Cache zero-data from readable responses; skip caching only
  unparseable bodies (STORY-011)
- 2026-10-15: Do not cache zero-data results (STORY-007)
- 2026-10-14: Degrade UpstreamFormatError to zero-data (STORY-007)
- 2026-10-13: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from solar_potential.errors import UpstreamFormatError
from solar_potential.models import NormalizedSolarData
from solar_potential.services.normalizer import normalize_irradiance

if TYPE_CHECKING:
    from solar_potential.cache.store import CacheStore
    from solar_potential.services.nasa_power import NasaPowerClient

logger = logging.getLogger(__name__)


class IrradianceFetcher:
    """Fetch normalized irradiance for a coordinate, using the cache first.

    Args:
        cache: Cache store shared across requests.
        provider: NASA POWER client.
        today: Date source used to pick the prior calendar year, injectable
            for tests.
    """

    def __init__(
        self,
        cache: CacheStore,
        provider: NasaPowerClient,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._today = today

    @property
    def cache(self) -> CacheStore:
        return self._cache

    def data_year(self) -> int:
        """The last complete calendar year."""
        return self._today().year - 1

    async def get_solar_data(
        self,
        latitude: float,
        longitude: float,
    ) -> NormalizedSolarData:
        """Return normalized irradiance for a coordinate.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            NormalizedSolarData: Possibly with an empty ``monthly_data`` when
            the provider answered without usable readings.

        Raises:
            ProviderError: Provider unreachable or non-2xx status.
        """
        cached = await self._cache_get(latitude, longitude)
        if cached is not None:
            return cached

        year = self.data_year()
        try:
            raw = await self._provider.fetch_monthly(latitude, longitude, year)
        except UpstreamFormatError:
            # Unreadable body: serve zero-data but leave the bucket uncached.
            logger.warning(
                "Unparseable provider response for %s, %s; returning zero-data",
                latitude,
                longitude,
            )
            return normalize_irradiance({}, latitude=latitude, longitude=longitude)

        data = normalize_irradiance(raw, latitude=latitude, longitude=longitude)
        if not data.monthly_data:
            logger.warning(
                "No valid irradiance months for %s, %s (year %d)",
                latitude,
                longitude,
                year,
            )

        await self._cache_set(latitude, longitude, data)
        return data

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _cache_get(
        self,
        latitude: float,
        longitude: float,
    ) -> NormalizedSolarData | None:
        try:
            return await self._cache.get(latitude, longitude)
        except Exception:
            logger.warning("Cache read failed, calling provider", exc_info=True)
            return None

    async def _cache_set(
        self,
        latitude: float,
        longitude: float,
        data: NormalizedSolarData,
    ) -> None:
        try:
            stored = await self._cache.set(latitude, longitude, data)
        except Exception:
            logger.warning("Cache write failed", exc_info=True)
            return
        if not stored:
            logger.warning("Cache declined entry for %s, %s", latitude, longitude)
