"""
GET /api/solar endpoint returning normalized irradiance for a coordinate.

Validates the ``lat``/``lon`` query parameters itself (rather than through
FastAPI typed params) so failures use the API's ``{"error", "message"}``
envelope with a 400 status. Fetcher failures map to a 500 with a generic
message; internal error text is logged only.

CHANGELOG:
- 2026-10-20: Accept only plain decimal coordinates (STORY-013)
- 2026-10-14: Map unexpected exceptions to UpstreamUnavailable (STORY-007)
- 2026-10-13: Initial creation (STORY-003)

TODO:
- None
"""

import logging
import math
import re
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from solar_potential.api.deps import FetcherDep
from solar_potential.errors import (
    InvalidCoordinate,
    MissingParameter,
    ProviderError,
    SolarApiError,
)
from solar_potential.models import ErrorResponse, Location, SolarResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["solar"])

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch solar data. Please try again later."

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def error_response(exc: SolarApiError) -> JSONResponse:
    """Render a SolarApiError as its JSON error envelope."""
    body = ErrorResponse(error=exc.error_code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def _parse_float(raw: str) -> float | None:
    """Parse a plain decimal such as ``-33.87`` or ``.5``; None otherwise.

    ``float()`` alone also accepts ``1_0``, surrounding whitespace, exponents
    and ``nan``/``inf``, none of which are coordinates.
    """
    if _DECIMAL_RE.fullmatch(raw) is None:
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def parse_coordinates(lat: str | None, lon: str | None) -> tuple[float, float]:
    """Validate raw ``lat``/``lon`` query strings.

    Args:
        lat: Latitude as received, possibly None or empty.
        lon: Longitude as received, possibly None or empty.

    Returns:
        tuple[float, float]: ``(latitude, longitude)``.

    Raises:
        MissingParameter: If either parameter is absent or blank.
        InvalidCoordinate: If either is non-numeric or out of range.
    """
    if not lat or not lat.strip() or not lon or not lon.strip():
        raise MissingParameter("Both lat and lon query parameters are required")

    latitude = _parse_float(lat)
    if latitude is None or not -90 <= latitude <= 90:
        raise InvalidCoordinate("Latitude must be a number between -90 and 90")

    longitude = _parse_float(lon)
    if longitude is None or not -180 <= longitude <= 180:
        raise InvalidCoordinate("Longitude must be a number between -180 and 180")

    return latitude, longitude


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------


@router.get(
    "/solar",
    response_model=SolarResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_solar(
    fetcher: FetcherDep,
    lat: Annotated[str | None, Query(description="Latitude, -90 to 90.")] = None,
    lon: Annotated[str | None, Query(description="Longitude, -180 to 180.")] = None,
) -> SolarResponse | JSONResponse:
    """Return average and monthly irradiance for a coordinate.

    Args:
        fetcher: Irradiance fetcher from app state.
        lat: Latitude query parameter.
        lon: Longitude query parameter.

    Returns:
        SolarResponse on success, or an error envelope with status 400/500.
    """
    try:
        latitude, longitude = parse_coordinates(lat, lon)
    except SolarApiError as exc:
        return error_response(exc)

    try:
        data = await fetcher.get_solar_data(latitude, longitude)
    except ProviderError as exc:
        logger.error("Error fetching solar data: %s", exc)
        return error_response(ProviderError(UPSTREAM_FAILURE_MESSAGE))
    except Exception:
        logger.exception("Unexpected error fetching solar data")
        return error_response(ProviderError(UPSTREAM_FAILURE_MESSAGE))

    return SolarResponse(
        data=data,
        location=Location(latitude=latitude, longitude=longitude),
    )
