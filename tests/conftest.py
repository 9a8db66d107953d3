"""
Shared test fixtures for the solar potential API tests.

Provides environment isolation for Settings, a NASA POWER style payload
builder, a stub fetcher and a TestClient wired to it so endpoint tests never
touch the network.

CHANGELOG:
- 2026-10-14: Add stub fetcher and client fixtures (STORY-003)
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Ensure the repository root is importable when pytest runs without an
# editable install.
_ROOT = str(Path(__file__).resolve().parent.parent)
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from solar_potential.api.main import create_app  # noqa: E402
from solar_potential.config import Settings  # noqa: E402
from solar_potential.models import (  # noqa: E402
    Location,
    MonthlyIrradiance,
    NormalizedSolarData,
)
from solar_potential.services.irradiance import IrradianceFetcher  # noqa: E402

_ALL_SOLAR_ENV_VARS = (
    "SOLAR_NASA_POWER_BASE_URL",
    "SOLAR_REQUEST_TIMEOUT_S",
    "SOLAR_CACHE_BACKEND",
    "SOLAR_CACHE_TTL_S",
    "SOLAR_CACHE_MAX_ENTRIES",
    "SOLAR_CACHE_SWEEP_INTERVAL_S",
    "SOLAR_REDIS_URL",
    "SOLAR_CORS_ORIGINS",
    "SOLAR_LOG_LEVEL",
    "SOLAR_LOG_JSON",
    "SOLAR_HOST",
    "SOLAR_PORT",
)

# Typical New Delhi monthly values (kWh/m²/day).
MONTHLY_VALUES = (4.1, 5.0, 6.1, 6.9, 7.2, 6.6, 5.4, 5.2, 5.5, 5.3, 4.5, 3.9)


@pytest.fixture(autouse=True)
def _clean_solar_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove all SOLAR_* env vars and isolate from .env files before each test."""
    for var in _ALL_SOLAR_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def make_payload(
    readings: dict[str, float] | None = None,
    year: int = 2025,
) -> dict:
    """Return a NASA POWER monthly point body.

    Defaults to twelve months of MONTHLY_VALUES plus the ``YYYY13`` annual
    aggregate.
    """
    if readings is None:
        readings = {f"{year}{m:02d}": v for m, v in enumerate(MONTHLY_VALUES, 1)}
        readings[f"{year}13"] = 5.47
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [77.2, 28.6, 216.0]},
        "properties": {"parameter": {"ALLSKY_SFC_SW_DWN": readings}},
        "header": {"fill_value": -999.0},
    }


def make_solar_data(
    latitude: float = 28.6,
    longitude: float = 77.2,
    average: float = 5.47,
) -> NormalizedSolarData:
    """Return a small NormalizedSolarData for stubbing the fetcher."""
    return NormalizedSolarData(
        average_daily_irradiance=average,
        monthly_data=[
            MonthlyIrradiance(month="January", month_index=0, irradiance=4.1),
            MonthlyIrradiance(month="February", month_index=1, irradiance=5.0),
        ],
        location=Location(latitude=latitude, longitude=longitude),
    )


@pytest.fixture()
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture()
def stub_fetcher() -> AsyncMock:
    """A fetcher double returning make_solar_data()."""
    fetcher = AsyncMock(spec=IrradianceFetcher)
    fetcher.get_solar_data = AsyncMock(return_value=make_solar_data())
    return fetcher


@pytest.fixture()
def client(
    settings: Settings,
    stub_fetcher: AsyncMock,
) -> Generator[TestClient, None, None]:
    """TestClient for an app using the stub fetcher.

    Uses a context manager so lifespan events run.
    """
    app = create_app(settings, fetcher=stub_fetcher)
    with TestClient(app) as test_client:
        yield test_client
