"""
GET /api/cache/stats endpoint exposing irradiance cache counters.

CHANGELOG:
- 2026-10-15: Initial creation (STORY-006)
"""

from fastapi import APIRouter

from solar_potential.api.deps import FetcherDep
from solar_potential.models import CacheStats

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats", response_model=CacheStats)
async def cache_stats(fetcher: FetcherDep) -> CacheStats:
    """Return key count and hit/miss counters of the active cache store."""
    return await fetcher.cache.stats()
