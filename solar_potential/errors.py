"""
Error taxonomy for the solar potential API.

Each error carries the wire ``error_code`` and HTTP ``status_code`` that the
endpoint adapter uses to build an ``{"error": ..., "message": ...}`` body.
Messages are safe to return to clients; upstream payloads and internal
exception text never go into them.

CHANGELOG:
- 2026-10-14: Add InvalidInput for the calculate endpoint (STORY-008)
- 2026-10-12: Initial creation (STORY-003)

TODO:
- None
"""


class SolarApiError(Exception):
    """Base class for errors surfaced through the HTTP API.

    Args:
        message: Client-safe description of the failure.
    """

    error_code = "InternalError"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameter(SolarApiError):
    """A required query parameter was absent or empty."""

    error_code = "MissingParameter"
    status_code = 400


class InvalidCoordinate(SolarApiError):
    """Latitude/longitude was non-numeric or out of range."""

    error_code = "InvalidCoordinate"
    status_code = 400


class InvalidInput(SolarApiError):
    """A calculation input (roof area, efficiency, rate) was out of range."""

    error_code = "InvalidInput"
    status_code = 400


class ProviderError(SolarApiError):
    """The irradiance provider was unreachable or returned a non-2xx status."""

    error_code = "UpstreamUnavailable"
    status_code = 500


class UpstreamFormatError(SolarApiError):
    """The provider answered but the body could not be parsed.

    The fetcher degrades this to a zero-data result instead of surfacing it.
    """

    error_code = "UpstreamFormatError"
    status_code = 500
