"""
Pure normalizer that converts a raw NASA POWER monthly payload into
NormalizedSolarData.

The provider nests the readings at
``properties.parameter.ALLSKY_SFC_SW_DWN`` as a mapping of ``YYYYMM`` period
keys to average daily irradiance (kWh/m²/day). ``YYYY13`` is the annual
aggregate and negative values (-999) mark missing data; both are excluded.

A payload of the wrong shape is not an error: missing levels are treated as
empty and unusable entries are skipped, so the worst case is an empty monthly
list with a zero average.

This is a pure function: no side effects, no I/O, no clock. The requested
coordinates are passed in and echoed in the result.

CHANGELOG:
- 2026-10-15: Order by derived month index so multi-year payloads stay sorted
- 2026-10-14: Skip malformed keys and non-numeric readings instead of failing
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from solar_potential.models import Location, MonthlyIrradiance, NormalizedSolarData

logger = logging.getLogger(__name__)

IRRADIANCE_PARAMETER = "ALLSKY_SFC_SW_DWN"

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ANNUAL_SUFFIX = "13"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _extract_readings(raw: Any) -> Mapping[str, Any]:
    """Return the period-key -> reading map, or an empty map if absent."""
    node: Any = raw
    for step in ("properties", "parameter", IRRADIANCE_PARAMETER):
        if not isinstance(node, Mapping):
            return {}
        node = node.get(step)
    if not isinstance(node, Mapping):
        if node is not None:
            logger.warning(
                "Irradiance readings have unexpected type %s, treating as empty",
                type(node).__name__,
            )
        return {}
    return node


def _month_index(key: str) -> int | None:
    """Zero-based month index from the last two characters of a period key."""
    if len(key) != 6 or not key.isdigit():
        return None
    month = int(key[-2:])
    if not 1 <= month <= 12:
        return None
    return month - 1


def _as_reading(value: Any) -> float | None:
    """Return *value* as a finite float, or None if it is not numeric."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    reading = float(value)
    if not math.isfinite(reading):
        return None
    return reading


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize_irradiance(
    raw: Any,
    *,
    latitude: float,
    longitude: float,
) -> NormalizedSolarData:
    """Convert a raw provider payload into NormalizedSolarData.

    Args:
        raw: Decoded JSON body of the NASA POWER monthly point response.
        latitude: Requested latitude, echoed in ``location``.
        longitude: Requested longitude, echoed in ``location``.

    Returns:
        NormalizedSolarData with months sorted by ``month_index`` and the
        average over exactly those months (0.0 when none are valid).
    """
    readings = _extract_readings(raw)

    monthly: list[MonthlyIrradiance] = []
    total = 0.0
    valid = 0

    for key, value in readings.items():
        key = str(key)
        if key.endswith(_ANNUAL_SUFFIX):
            continue

        month_index = _month_index(key)
        if month_index is None:
            logger.warning("Skipping malformed period key '%s'", key)
            continue

        reading = _as_reading(value)
        if reading is None:
            logger.warning("Skipping non-numeric reading %r for '%s'", value, key)
            continue

        # Negative readings are the provider's missing-data sentinel.
        if reading < 0:
            continue

        monthly.append(
            MonthlyIrradiance(
                month=MONTH_NAMES[month_index],
                month_index=month_index,
                irradiance=round(reading, 2),
            )
        )
        total += reading
        valid += 1

    monthly.sort(key=lambda m: m.month_index)

    average = round(total / valid, 2) if valid else 0.0

    return NormalizedSolarData(
        average_daily_irradiance=average,
        monthly_data=monthly,
        location=Location(latitude=latitude, longitude=longitude),
    )
