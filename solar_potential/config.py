"""
Service configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every variable carries the ``SOLAR_`` prefix and may also come from a ``.env``
file. All values have defaults so the API starts with no configuration; the
Redis URL becomes required only when the Redis cache backend is selected.

CHANGELOG:
- 2026-10-15: Add cache_max_entries and sweep interval bound (STORY-006)
- 2026-10-13: Add Redis cache backend selection (STORY-005)
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NASA_POWER_MONTHLY_URL = "https://power.larc.nasa.gov/api/temporal/monthly/point"

# 24 hours: irradiance values are daily averages of a closed calendar year.
DEFAULT_CACHE_TTL_S = 86400

# Upper bound for the expiry sweep so memory growth stays bounded.
MAX_SWEEP_INTERVAL_S = 600

_CACHE_BACKENDS = ("memory", "redis")


class Settings(BaseSettings):
    """Solar potential API configuration.

    Attributes:
        nasa_power_base_url: NASA POWER monthly point endpoint.
        request_timeout_s: Timeout in seconds for the outbound provider call.
        cache_backend: ``memory`` (in-process) or ``redis``.
        cache_ttl_s: Lifetime of a cached irradiance result in seconds.
        cache_max_entries: Capacity of the in-memory store.
        cache_sweep_interval_s: Seconds between expiry sweeps of the
            in-memory store (max 600).
        redis_url: Redis connection URL, required for the ``redis`` backend.
        cors_origins: Origins allowed to call the API from a browser.
        log_level: Root log level name.
        log_json: Emit structured JSON log lines when true.
        host: Bind address for ``python -m solar_potential``.
        port: Bind port for ``python -m solar_potential``.
    """

    nasa_power_base_url: str = NASA_POWER_MONTHLY_URL
    request_timeout_s: float = 30.0
    cache_backend: str = "memory"
    cache_ttl_s: int = DEFAULT_CACHE_TTL_S
    cache_max_entries: int = 10000
    cache_sweep_interval_s: int = MAX_SWEEP_INTERVAL_S
    redis_url: str | None = None
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    log_json: bool = True
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_prefix="SOLAR_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("nasa_power_base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        """Validate the provider URL uses an HTTP(S) scheme."""
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError("SOLAR_NASA_POWER_BASE_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("request_timeout_s")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("SOLAR_REQUEST_TIMEOUT_S must be > 0")
        return v

    @field_validator("cache_backend")
    @classmethod
    def cache_backend_must_be_known(cls, v: str) -> str:
        """Validate the cache backend name (case-insensitive)."""
        backend = v.strip().lower()
        if backend not in _CACHE_BACKENDS:
            raise ValueError(
                f"SOLAR_CACHE_BACKEND must be one of {', '.join(_CACHE_BACKENDS)}"
            )
        return backend

    @field_validator("cache_ttl_s")
    @classmethod
    def cache_ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("SOLAR_CACHE_TTL_S must be > 0")
        return v

    @field_validator("cache_max_entries")
    @classmethod
    def cache_max_entries_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SOLAR_CACHE_MAX_ENTRIES must be >= 1")
        return v

    @field_validator("cache_sweep_interval_s")
    @classmethod
    def sweep_interval_must_be_bounded(cls, v: int) -> int:
        """Validate the sweep interval is between 1 and 600 seconds."""
        if v < 1 or v > MAX_SWEEP_INTERVAL_S:
            raise ValueError(
                f"SOLAR_CACHE_SWEEP_INTERVAL_S must be between 1 and "
                f"{MAX_SWEEP_INTERVAL_S}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"SOLAR_LOG_LEVEL '{v}' is not a logging level")
        return level

    @field_validator("port")
    @classmethod
    def port_must_be_valid(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("SOLAR_PORT must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def _redis_url_required_for_redis(self) -> "Settings":
        """Require SOLAR_REDIS_URL when the Redis backend is selected."""
        if self.cache_backend == "redis" and not self.redis_url:
            raise ValueError(
                "SOLAR_REDIS_URL is required when SOLAR_CACHE_BACKEND=redis"
            )
        return self
