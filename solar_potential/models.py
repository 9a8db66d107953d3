"""
Pydantic models for normalized irradiance data and API envelopes.

Python attributes are snake_case; every model serializes with camelCase
aliases (``averageDailyIrradiance``, ``monthlyData``, ``monthIndex``) because
that is the JSON contract consumed by the frontend. Both spellings are
accepted on input.

CHANGELOG:
- 2026-10-20: Add system cost and payback years (STORY-012)
- 2026-10-14: Add SolarPotential and PotentialRequest (STORY-008)
- 2026-10-13: Add CacheStats (STORY-005)
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DATA_SOURCE = "NASA POWER API"
PARAMETER_DESCRIPTION = (
    "ALLSKY_SFC_SW_DWN (All Sky Surface Shortwave Downward Irradiance)"
)
IRRADIANCE_UNIT = "kWh/m²/day"
IRRADIANCE_NOTE = (
    "Solar irradiance data represents the average solar energy received "
    "per square meter per day"
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(_CamelModel):
    """Coordinates echoed from the request (not the provider's grid point)."""

    latitude: float
    longitude: float


class MonthlyIrradiance(_CamelModel):
    """Average daily irradiance for one calendar month.

    Attributes:
        month: English month name (``January`` ... ``December``).
        month_index: Zero-based month number (0 = January).
        irradiance: Average daily irradiance in kWh/m²/day, 2 decimals.
    """

    month: str
    month_index: int = Field(ge=0, le=11)
    irradiance: float


class NormalizedSolarData(_CamelModel):
    """Canonical irradiance result for one coordinate.

    ``average_daily_irradiance`` is the plain mean over exactly the entries
    in ``monthly_data`` (0.0 when there are none). The remaining fields are
    descriptive metadata.
    """

    average_daily_irradiance: float
    monthly_data: list[MonthlyIrradiance]
    data_source: str = DATA_SOURCE
    parameter: str = PARAMETER_DESCRIPTION
    unit: str = IRRADIANCE_UNIT
    location: Location
    note: str = IRRADIANCE_NOTE


class SolarResponse(_CamelModel):
    """Success envelope for ``GET /api/solar``."""

    success: bool = True
    data: NormalizedSolarData
    location: Location


class ErrorResponse(_CamelModel):
    """Error envelope shared by all endpoints."""

    error: str
    message: str


class HealthResponse(_CamelModel):
    status: str
    message: str
    timestamp: str


class CacheStats(_CamelModel):
    """Counters reported by a cache store.

    Attributes:
        keys: Number of stored entries (``-1`` when the backend cannot tell).
        hits: Lookups answered from the cache.
        misses: Lookups that found nothing or an expired entry.
    """

    keys: int
    hits: int
    misses: int


class SolarPotential(_CamelModel):
    """Output of the rooftop calculation.

    Attributes:
        annual_energy: kWh per year, rounded to an integer.
        annual_savings: Currency units per year, rounded to an integer.
        co2_saved: kg CO2 avoided per year, rounded to an integer.
        daily_energy: Average kWh per day, 2 decimals.
        monthly_savings: Average savings per month, rounded to an integer.
        avg_daily_irradiance: The irradiance the estimate was based on.
        monthly_energy: Optional 12-month kWh breakdown.
        payback_years: Years for savings to cover ``system_cost``, 1 decimal.
            None when no system cost was given or there are no savings.
    """

    annual_energy: int
    annual_savings: int
    co2_saved: int
    daily_energy: float
    monthly_savings: int
    avg_daily_irradiance: float
    monthly_energy: list[float] | None = None
    payback_years: float | None = None


class PotentialRequest(_CamelModel):
    """Request body for ``POST /api/calculate``.

    Only types are checked here; ranges are enforced by
    ``calculator.validate_inputs`` so clients get its messages.
    """

    latitude: float
    longitude: float
    roof_area: float
    efficiency: float = 18
    electricity_rate: float
    system_cost: float | None = None


class PotentialResponse(_CamelModel):
    """Success envelope for ``POST /api/calculate``."""

    success: bool = True
    data: SolarPotential
    solar: NormalizedSolarData
    location: Location
