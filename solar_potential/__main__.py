"""
Command-line entry point: ``python -m solar_potential``.

Loads settings from the environment, applies command-line overrides,
configures logging, logs a startup summary (no secrets) and serves the API
with uvicorn.

CHANGELOG:
- 2026-10-16: Initial creation (STORY-010)

TODO:
- None
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from solar_potential.api.main import create_app
from solar_potential.config import Settings
from solar_potential.logging_setup import configure_logging, masked_url

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solar-potential",
        description="Serve the rooftop solar potential API.",
    )
    parser.add_argument("--host", help="Bind address (default: SOLAR_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (default: SOLAR_PORT)")
    parser.add_argument(
        "--log-level",
        help="Log level name (default: SOLAR_LOG_LEVEL)",
    )
    return parser


def log_config_summary(settings: Settings) -> None:
    """Log the effective configuration, masking any Redis password."""
    base = f"http://{settings.host}:{settings.port}"
    logger.info(
        "Solar potential server starting: url=%s, health=%s/api/health, "
        "solar=%s/api/solar?lat=28.6&lon=77.2, provider=%s, "
        "cache_backend=%s, cache_ttl_s=%d, redis_url=%s",
        base,
        base,
        base,
        settings.nasa_power_base_url,
        settings.cache_backend,
        settings.cache_ttl_s,
        masked_url(settings.redis_url),
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    settings = Settings(**overrides)

    configure_logging(settings.log_level, json_output=settings.log_json)
    log_config_summary(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
