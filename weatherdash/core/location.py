"""Location resolution: place name or coordinates → PlaceDescriptor.

Forward lookups fail hard (no coordinates to fall back on). Reverse lookups
degrade to "Your Location" with the input coordinates, since the weather
fetch only needs coordinates.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import ValidationError

from weatherdash.core.errors import MalformedResponseError, NotFoundError, WeatherDashError
from weatherdash.core.models import FALLBACK_PLACE_NAME, PlaceDescriptor
from weatherdash.utils.logger import get_logger

logger = get_logger("location")

# Address fields tried in order for a display name
_NAME_FIELDS = ("city", "town", "village")


class ForwardGeocoder(Protocol):
    async def search(self, query: str, count: int = 1) -> list[dict[str, Any]]: ...


class ReverseGeocoder(Protocol):
    async def reverse(self, latitude: float, longitude: float) -> dict[str, Any]: ...


class LocationResolver:
    """Turns user input into a canonical place."""

    def __init__(self, forward: ForwardGeocoder, reverse: ReverseGeocoder) -> None:
        self._forward = forward
        self._reverse = reverse

    async def resolve_by_name(self, query: str) -> PlaceDescriptor:
        """Resolve a free-text place name using the best geocoding match.

        Raises:
            NotFoundError: Empty query or no matches.
            NetworkError: The geocoding request could not complete.
            MalformedResponseError: The best match lacks a name or valid coordinates.
        """
        query = query.strip()
        if not query:
            raise NotFoundError()

        results = await self._forward.search(query, count=1)
        if not results:
            logger.info("geocode_no_match", query=query)
            raise NotFoundError()

        return _place_from_candidate(results[0])

    async def resolve_by_coordinates(self, latitude: float, longitude: float) -> PlaceDescriptor:
        """Resolve coordinates to a named place, never failing on lookup errors.

        Raises:
            ValueError: Coordinates out of range.
        """
        fallback = PlaceDescriptor(
            name=FALLBACK_PLACE_NAME,
            country="",
            latitude=latitude,
            longitude=longitude,
        )

        try:
            data = await self._reverse.reverse(latitude, longitude)
        except WeatherDashError as e:
            logger.warning("reverse_geocode_failed", lat=latitude, lon=longitude, error=str(e))
            return fallback

        address = data.get("address")
        if not isinstance(address, dict):
            logger.warning("reverse_geocode_no_address", lat=latitude, lon=longitude)
            return fallback

        name = next(
            (address[f] for f in _NAME_FIELDS if isinstance(address.get(f), str) and address[f]),
            FALLBACK_PLACE_NAME,
        )
        country = address.get("country")
        return PlaceDescriptor(
            name=name,
            country=country if isinstance(country, str) else "",
            latitude=latitude,
            longitude=longitude,
        )


def _place_from_candidate(candidate: dict[str, Any]) -> PlaceDescriptor:
    name = candidate.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedResponseError("geocoding match has no name")
    country = candidate.get("country")
    try:
        return PlaceDescriptor(
            name=name,
            country=country if isinstance(country, str) else "",
            latitude=candidate.get("latitude"),  # type: ignore[arg-type]
            longitude=candidate.get("longitude"),  # type: ignore[arg-type]
        )
    except ValidationError as e:
        raise MalformedResponseError("geocoding match has invalid coordinates") from e
