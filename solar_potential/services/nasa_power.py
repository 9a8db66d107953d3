"""
HTTP client for the NASA POWER monthly point API.

Requests the all-sky surface shortwave downward irradiance
(``ALLSKY_SFC_SW_DWN``) under the renewable-energy community profile for a
single coordinate and calendar-year range, and returns the decoded JSON body.

Transport failures (connection errors, timeouts) and non-2xx responses raise
ProviderError. The upstream body is logged, truncated, but never placed in the
exception message. A 2xx body that is not a JSON object raises
UpstreamFormatError.

Operations:
- fetch_monthly(latitude, longitude, year): Monthly readings for one year.

CHANGELOG:
- 2026-10-14: Raise UpstreamFormatError for unparseable bodies (STORY-007)
- 2026-10-13: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from solar_potential.config import NASA_POWER_MONTHLY_URL
from solar_potential.errors import ProviderError, UpstreamFormatError
from solar_potential.services.normalizer import IRRADIANCE_PARAMETER

logger = logging.getLogger(__name__)

COMMUNITY = "RE"

_GENERIC_FAILURE = "Failed to fetch solar data from NASA POWER API"
_LOGGED_BODY_CHARS = 200


class NasaPowerClient:
    """Client for the NASA POWER monthly point endpoint.

    The ``httpx.AsyncClient`` is injected so the application lifespan owns
    its connection pool and tests can pass one built on
    ``httpx.MockTransport``.

    Args:
        http_client: Shared async HTTP client. Its timeout applies to every
            request.
        base_url: Monthly point endpoint URL.

    Usage::

        async with httpx.AsyncClient(timeout=30.0) as http:
            client = NasaPowerClient(http)
            payload = await client.fetch_monthly(28.61, 77.21, 2025)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = NASA_POWER_MONTHLY_URL,
    ) -> None:
        self._http = http_client
        self._base_url = base_url

    @staticmethod
    def build_params(latitude: float, longitude: float, year: int) -> dict[str, str]:
        """Query parameters for a single-year monthly request."""
        return {
            "parameters": IRRADIANCE_PARAMETER,
            "community": COMMUNITY,
            "longitude": str(longitude),
            "latitude": str(latitude),
            "start": str(year),
            "end": str(year),
            "format": "JSON",
        }

    async def fetch_monthly(
        self,
        latitude: float,
        longitude: float,
        year: int,
    ) -> dict[str, Any]:
        """Fetch monthly irradiance readings for one calendar year.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.
            year: Calendar year used for both start and end.

        Returns:
            dict: Decoded JSON response body.

        Raises:
            ProviderError: On transport failure or a non-2xx status.
            UpstreamFormatError: If the body is not a JSON object.
        """
        params = self.build_params(latitude, longitude, year)

        try:
            response = await self._http.get(self._base_url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Error calling NASA POWER API: %s", exc)
            raise ProviderError(_GENERIC_FAILURE) from exc

        if not response.is_success:
            logger.error(
                "NASA POWER API responded with status %d: %s",
                response.status_code,
                response.text[:_LOGGED_BODY_CHARS],
            )
            raise ProviderError(_GENERIC_FAILURE)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning(
                "NASA POWER API returned a non-JSON body: %s",
                response.text[:_LOGGED_BODY_CHARS],
            )
            raise UpstreamFormatError("Provider response was not valid JSON") from exc

        if not isinstance(payload, dict):
            raise UpstreamFormatError("Provider response was not a JSON object")

        return payload
