"""
FastAPI application factory and entry point for the solar potential API.

create_app() wires routers and CORS and attaches a lifespan that owns the
request-path resources: the cache store (with its expiry sweep), the shared
httpx client and the IrradianceFetcher stored on ``app.state``. All of them
are created at startup and closed at shutdown. Tests pass a ready-made
fetcher instead, in which case the lifespan builds nothing.

No application is built at import time, so settings are only read when
create_app() runs. External ASGI servers use factory mode:
``uvicorn solar_potential.api.main:create_app --factory``.

CHANGELOG:
- 2026-10-20: Drop the import-time app instance; servers use factory mode
  (STORY-013)
- 2026-10-15: Register cache stats router (STORY-006)
- 2026-10-14: Register calculate router (STORY-008)
- 2026-10-13: Build cache store, provider client and fetcher in lifespan (STORY-003)
- 2026-10-12: Initial creation (STORY-001)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from solar_potential import __version__
from solar_potential.api.cache import router as cache_router
from solar_potential.api.calculate import router as calculate_router
from solar_potential.api.health import router as health_router
from solar_potential.api.solar import router as solar_router
from solar_potential.cache import build_cache_store
from solar_potential.config import Settings
from solar_potential.services.irradiance import IrradianceFetcher
from solar_potential.services.nasa_power import NasaPowerClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build and tear down request-path resources.

    Startup:
        - Builds the cache store selected by settings and starts its sweep.
        - Opens the shared httpx client with the configured timeout.
        - Stores the IrradianceFetcher on ``app.state.fetcher``.

    Shutdown:
        - Closes the httpx client and the cache store.

    A fetcher injected through create_app() is used as-is.
    """
    if app.state.fetcher is not None:
        logger.info("Using injected irradiance fetcher")
        yield
        return

    settings: Settings = app.state.settings
    cache_store = build_cache_store(settings)
    cache_store.start()
    http_client = httpx.AsyncClient(timeout=settings.request_timeout_s)
    provider = NasaPowerClient(http_client, base_url=settings.nasa_power_base_url)
    app.state.fetcher = IrradianceFetcher(cache_store, provider)

    logger.info(
        "Solar potential API ready (cache_backend=%s, cache_ttl_s=%d)",
        settings.cache_backend,
        settings.cache_ttl_s,
    )
    try:
        yield
    finally:
        logger.info("Solar potential API shutting down")
        app.state.fetcher = None
        await http_client.aclose()
        await cache_store.close()


def create_app(
    settings: Settings | None = None,
    *,
    fetcher: IrradianceFetcher | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings; loaded from the environment when omitted.
        fetcher: Pre-built fetcher. When given, the lifespan does not create
            a cache store or HTTP client.

    Returns:
        FastAPI: Configured application.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Solar Potential API",
        description="Rooftop solar potential from NASA POWER irradiance data.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.fetcher = fetcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.include_router(health_router)
    app.include_router(solar_router)
    app.include_router(calculate_router)
    app.include_router(cache_router)

    return app
