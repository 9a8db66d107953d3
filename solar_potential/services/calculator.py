"""
Rooftop solar calculations.

Annual energy (kWh) = roof area (m²) x panel efficiency x average daily
irradiance (kWh/m²/day) x 365. Savings multiply energy by the electricity
rate; CO2 avoided multiplies energy by the grid emission factor.

System losses, panel degradation, tilt/orientation, shading and temperature
effects are intentionally not modelled.

CHANGELOG:
- 2026-10-20: Report payback years when a system cost is given (STORY-012)
- 2026-10-14: Add monthly breakdown, payback estimate and input validation
  (STORY-008)
- 2026-10-13: Initial creation (STORY-008)

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from solar_potential.errors import InvalidInput
from solar_potential.models import SolarPotential

logger = logging.getLogger(__name__)

# kg CO2 per kWh, Central Electricity Authority (India) grid average.
CO2_EMISSION_FACTOR = 0.82

PANEL_EFFICIENCY_MIN = 15
PANEL_EFFICIENCY_DEFAULT = 18
PANEL_EFFICIENCY_MAX = 22

MAX_ROOF_AREA_M2 = 10000

DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _round_half_up(value: float, ndigits: int = 0) -> float:
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def calculate_solar_potential(
    roof_area: float,
    efficiency_percent: float,
    electricity_rate: float,
    avg_daily_irradiance: float,
    monthly_irradiance: Sequence[float] | None = None,
    system_cost: float | None = None,
) -> SolarPotential:
    """Estimate annual energy, savings and CO2 avoided for a roof.

    All rounding happens on the final values; intermediates stay unrounded.

    Args:
        roof_area: Usable roof area in m².
        efficiency_percent: Panel efficiency in percent (15-22).
        electricity_rate: Price per kWh.
        avg_daily_irradiance: Average daily irradiance in kWh/m²/day.
        monthly_irradiance: Optional 12 monthly irradiance values; when
            given, the result includes a monthly energy breakdown.
        system_cost: Optional installation cost; when given, the result
            includes the payback period (None if there are no savings).

    Returns:
        SolarPotential with integer annual figures.
    """
    efficiency = efficiency_percent / 100
    annual_energy = roof_area * efficiency * avg_daily_irradiance * 365
    annual_savings = annual_energy * electricity_rate
    co2_saved = annual_energy * CO2_EMISSION_FACTOR

    monthly_energy = None
    if monthly_irradiance is not None:
        monthly_energy = calculate_monthly_energy(
            roof_area, efficiency_percent, monthly_irradiance
        )

    payback_years = None
    if system_cost is not None:
        payback = estimate_payback_period(system_cost, annual_savings)
        # JSON has no infinity.
        payback_years = payback if math.isfinite(payback) else None

    return SolarPotential(
        annual_energy=int(_round_half_up(annual_energy)),
        annual_savings=int(_round_half_up(annual_savings)),
        co2_saved=int(_round_half_up(co2_saved)),
        daily_energy=round(annual_energy / 365, 2),
        monthly_savings=int(_round_half_up(annual_savings / 12)),
        avg_daily_irradiance=avg_daily_irradiance,
        monthly_energy=monthly_energy,
        payback_years=payback_years,
    )


def calculate_monthly_energy(
    roof_area: float,
    efficiency_percent: float,
    monthly_irradiance: Sequence[float],
) -> list[float]:
    """Energy per calendar month in kWh, rounded to 1 decimal.

    Returns 12 zeros when *monthly_irradiance* does not hold exactly 12
    values.
    """
    if len(monthly_irradiance) != 12:
        logger.warning(
            "Expected 12 monthly irradiance values, got %d",
            len(monthly_irradiance),
        )
        return [0.0] * 12

    efficiency = efficiency_percent / 100
    return [
        _round_half_up(roof_area * efficiency * irradiance * days, 1)
        for irradiance, days in zip(monthly_irradiance, DAYS_IN_MONTH)
    ]


def estimate_payback_period(system_cost: float, annual_savings: float) -> float:
    """Years until savings cover *system_cost*, rounded to 1 decimal.

    Returns ``math.inf`` when there are no savings.
    """
    if annual_savings <= 0:
        return math.inf
    return _round_half_up(system_cost / annual_savings, 1)


def validate_inputs(
    lat: float,
    lon: float,
    roof_area: float,
    efficiency: float,
    rate: float,
    system_cost: float | None = None,
) -> None:
    """Check calculation inputs are within realistic ranges.

    ``system_cost`` is optional and only checked when given.

    Raises:
        InvalidInput: Describing the first failing input.
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidInput("Please select a location on the map or enter coordinates.")
    if not -90 <= lat <= 90:
        raise InvalidInput("Latitude must be between -90 and 90 degrees.")
    if not -180 <= lon <= 180:
        raise InvalidInput("Longitude must be between -180 and 180 degrees.")
    if not math.isfinite(roof_area) or roof_area <= 0:
        raise InvalidInput("Please enter a valid roof area (greater than 0).")
    if roof_area > MAX_ROOF_AREA_M2:
        raise InvalidInput("Roof area seems too large. Please enter a realistic value.")
    if (
        not math.isfinite(efficiency)
        or efficiency < PANEL_EFFICIENCY_MIN
        or efficiency > PANEL_EFFICIENCY_MAX
    ):
        raise InvalidInput(
            f"Panel efficiency must be between {PANEL_EFFICIENCY_MIN}% "
            f"and {PANEL_EFFICIENCY_MAX}%."
        )
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidInput("Please enter a valid electricity rate.")
    if system_cost is not None and (not math.isfinite(system_cost) or system_cost <= 0):
        raise InvalidInput("Please enter a valid system cost (greater than 0).")
