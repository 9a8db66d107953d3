"""
POST /api/calculate endpoint combining irradiance retrieval with the rooftop
calculation.

Accepts roof area, panel efficiency, electricity rate and an optional system
cost for a coordinate, fetches irradiance through the shared fetcher (so the
cache applies), and returns the annual estimate plus a monthly energy
breakdown when all twelve months are available.

The body is read from the raw request so that every malformed body (not
JSON, not an object, missing or mistyped fields) gets the API's
``{"error", "message"}`` envelope with a 400 status.

CHANGELOG:
- 2026-10-20: Read the raw body so non-object bodies return InvalidInput;
  accept systemCost and report paybackYears (STORY-012)
- 2026-10-14: Initial creation (STORY-008)

TODO:
- None
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from solar_potential.api.deps import FetcherDep
from solar_potential.api.solar import UPSTREAM_FAILURE_MESSAGE, error_response
from solar_potential.errors import InvalidInput, ProviderError, SolarApiError
from solar_potential.models import (
    ErrorResponse,
    Location,
    PotentialRequest,
    PotentialResponse,
)
from solar_potential.services.calculator import (
    calculate_solar_potential,
    validate_inputs,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["calculate"])

# The handler reads the body itself; publish the schema for the docs.
_REQUEST_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": PotentialRequest.model_json_schema(by_alias=True),
            },
        },
    },
}


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Decode the request body, which must be a JSON object."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidInput("Request body must be a JSON object") from exc
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    return payload


def _parse_request(payload: dict[str, Any]) -> PotentialRequest:
    """Validate the request body, raising InvalidInput on any problem."""
    try:
        req = PotentialRequest.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise InvalidInput(
            f"Missing or non-numeric fields: {', '.join(fields)}"
        ) from exc
    validate_inputs(
        req.latitude,
        req.longitude,
        req.roof_area,
        req.efficiency,
        req.electricity_rate,
        system_cost=req.system_cost,
    )
    return req


@router.post(
    "/calculate",
    response_model=PotentialResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra=_REQUEST_BODY_DOC,
)
async def calculate(
    request: Request,
    fetcher: FetcherDep,
) -> PotentialResponse | JSONResponse:
    """Estimate rooftop solar potential for a location.

    Args:
        request: Incoming request whose JSON body holds latitude, longitude,
            roofArea, efficiency, electricityRate and optionally systemCost.
        fetcher: Irradiance fetcher from app state.

    Returns:
        PotentialResponse on success, or an error envelope with status
        400/500.
    """
    try:
        req = _parse_request(await _read_json_object(request))
    except SolarApiError as exc:
        return error_response(exc)

    try:
        solar = await fetcher.get_solar_data(req.latitude, req.longitude)
    except ProviderError as exc:
        logger.error("Error fetching solar data: %s", exc)
        return error_response(ProviderError(UPSTREAM_FAILURE_MESSAGE))
    except Exception:
        logger.exception("Unexpected error fetching solar data")
        return error_response(ProviderError(UPSTREAM_FAILURE_MESSAGE))

    monthly = None
    if len(solar.monthly_data) == 12:
        monthly = [m.irradiance for m in solar.monthly_data]

    potential = calculate_solar_potential(
        req.roof_area,
        req.efficiency,
        req.electricity_rate,
        solar.average_daily_irradiance,
        monthly_irradiance=monthly,
        system_cost=req.system_cost,
    )

    return PotentialResponse(
        data=potential,
        solar=solar,
        location=Location(latitude=req.latitude, longitude=req.longitude),
    )
