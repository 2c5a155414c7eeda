"""Error taxonomy shared by the connectors, resolver and controller.

Connectors and the location resolver raise these; the dashboard controller
is the only place that turns them into user-facing messages.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"
    PERMISSION_DENIED = "permission_denied"
    UNEXPECTED = "unexpected"


class WeatherDashError(Exception):
    """Base error. ``user_message`` is what the dashboard shows."""

    kind = ErrorKind.UNEXPECTED
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class NotFoundError(WeatherDashError):
    """Forward geocoding found no match."""

    kind = ErrorKind.NOT_FOUND
    default_message = "City not found"


class NetworkError(WeatherDashError):
    """Transport failure, timeout or non-success HTTP status."""

    kind = ErrorKind.NETWORK
    default_message = "Network error, please try again"


class MalformedResponseError(WeatherDashError):
    """A service answered, but without the fields we need."""

    kind = ErrorKind.MALFORMED_RESPONSE
    default_message = "Unexpected response from weather service"


class PermissionDeniedError(WeatherDashError):
    """Geolocation was denied, timed out or is unavailable."""

    kind = ErrorKind.PERMISSION_DENIED
    default_message = "Location access denied"
