"""
FastAPI dependency injection providers.

The fetcher is built once in the application lifespan (or injected by
create_app in tests) and stored on ``app.state``; route handlers receive it
through Depends() instead of reaching for a module-level singleton.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-003)
"""

from typing import Annotated

from fastapi import Depends, Request

from solar_potential.services.irradiance import IrradianceFetcher


def get_fetcher(request: Request) -> IrradianceFetcher:
    """Return the IrradianceFetcher stored on ``app.state``.

    Args:
        request: The incoming FastAPI request.

    Returns:
        IrradianceFetcher: The process-wide fetcher.
    """
    return request.app.state.fetcher


# Type alias for injecting the fetcher via FastAPI Depends().
# Usage in route handlers:
#   async def my_route(fetcher: FetcherDep):
#       data = await fetcher.get_solar_data(lat, lon)
FetcherDep = Annotated[IrradianceFetcher, Depends(get_fetcher)]
