"""Forward and reverse geocoding connectors.

Forward: Open-Meteo geocoding API (geocoding-api.open-meteo.com), free, no key.
Reverse: OpenStreetMap Nominatim, free, requires an identifying User-Agent.

Both return the decoded JSON payload; turning it into a PlaceDescriptor is
the location resolver's job.
"""

from __future__ import annotations

from typing import Any

from weatherdash.connectors.base import JsonHttpClient
from weatherdash.core.errors import MalformedResponseError
from weatherdash.utils.logger import get_logger

logger = get_logger("geocoding")

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"


class OpenMeteoGeocodingClient(JsonHttpClient):
    """Async client for the Open-Meteo place search endpoint."""

    service_name = "geocoding"

    def __init__(self, base_url: str = GEOCODING_URL, language: str = "en", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._base_url = base_url
        self._language = language

    async def search(self, query: str, count: int = 1) -> list[dict[str, Any]]:
        """Search places by name, best match first. Empty list when nothing matches."""
        params = {
            "name": query,
            "count": str(count),
            "language": self._language,
            "format": "json",
        }
        logger.info("geocode_search", query=query)
        data = await self._get_json(self._base_url, params)
        if not isinstance(data, dict):
            raise MalformedResponseError("geocoding returned an unexpected payload")

        # The API omits "results" entirely when there is no match
        results = data.get("results") or []
        if not isinstance(results, list):
            raise MalformedResponseError("geocoding results are not a list")
        return [r for r in results if isinstance(r, dict)]


class NominatimReverseGeocodingClient(JsonHttpClient):
    """Async client for the Nominatim reverse lookup endpoint."""

    service_name = "reverse_geocoding"

    def __init__(self, base_url: str = REVERSE_GEOCODING_URL, language: str = "en", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._base_url = base_url
        self._language = language

    async def reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        """Look up the address at a coordinate pair."""
        params = {
            "format": "json",
            "lat": str(latitude),
            "lon": str(longitude),
            "accept-language": self._language,
        }
        logger.info("reverse_geocode", lat=latitude, lon=longitude)
        data = await self._get_json(self._base_url, params)
        if not isinstance(data, dict):
            raise MalformedResponseError("reverse geocoding returned an unexpected payload")
        return data
