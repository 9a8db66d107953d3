"""
Health check endpoint for the solar potential API.

Provides GET /api/health returning status, a short message and the current
UTC timestamp. Does not touch the cache or the provider, so it is safe for
container HEALTHCHECK commands.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

from datetime import UTC, datetime

from fastapi import APIRouter

from solar_potential.models import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return a simple health status.

    Returns:
        HealthResponse: ``status`` is always ``"ok"`` while the app serves.
    """
    return HealthResponse(
        status="ok",
        message="Solar Calculator API is running",
        timestamp=datetime.now(tz=UTC).isoformat(),
    )
