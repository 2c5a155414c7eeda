"""Shared test fixtures for the weatherdash test suite."""

from __future__ import annotations

import copy
import os
from typing import Any

import pytest

from weatherdash.core.models import PlaceDescriptor
from weatherdash.storage import MemoryStorage

# Set test environment before any config is loaded
os.environ.setdefault("MODE", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

_GEOCODE_NEW_DELHI = {
    "results": [
        {
            "id": 1261481,
            "name": "New Delhi",
            "latitude": 28.61,
            "longitude": 77.21,
            "elevation": 216.0,
            "feature_code": "PPLC",
            "country_code": "IN",
            "admin1": "Delhi",
            "timezone": "Asia/Kolkata",
            "country": "India",
        }
    ],
    "generationtime_ms": 0.61,
}

_REVERSE_PUNE = {
    "place_id": 98765432,
    "lat": "18.5204",
    "lon": "73.8567",
    "display_name": "Shivajinagar, Pune, Maharashtra, 411005, India",
    "address": {
        "suburb": "Shivajinagar",
        "city": "Pune",
        "state": "Maharashtra",
        "postcode": "411005",
        "country": "India",
        "country_code": "in",
    },
}

_FORECAST_NEW_DELHI = {
    "latitude": 28.625,
    "longitude": 77.25,
    "generationtime_ms": 0.12,
    "utc_offset_seconds": 19800,
    "timezone": "Asia/Kolkata",
    "timezone_abbreviation": "IST",
    "current_units": {
        "time": "iso8601",
        "interval": "seconds",
        "temperature_2m": "°C",
        "relative_humidity_2m": "%",
        "apparent_temperature": "°C",
        "is_day": "",
        "weather_code": "wmo code",
        "wind_speed_10m": "km/h",
        "visibility": "m",
    },
    "current": {
        "time": "2026-03-01T14:00",
        "interval": 900,
        "temperature_2m": 30.4,
        "relative_humidity_2m": 41,
        "apparent_temperature": 31.6,
        "is_day": 1,
        "weather_code": 2,
        "wind_speed_10m": 11.5,
        "visibility": 24140.0,
    },
    "daily_units": {
        "time": "iso8601",
        "weather_code": "wmo code",
        "temperature_2m_max": "°C",
        "temperature_2m_min": "°C",
    },
    "daily": {
        "time": [
            "2026-03-01",
            "2026-03-02",
            "2026-03-03",
            "2026-03-04",
            "2026-03-05",
            "2026-03-06",
            "2026-03-07",
        ],
        "weather_code": [2, 0, 3, 61, 95, 1, 45],
        "temperature_2m_max": [31.2, 32.5, 30.1, 27.8, 26.4, 29.9, 30.3],
        "temperature_2m_min": [17.6, 18.2, 19.5, 18.9, 17.1, 16.4, 16.8],
    },
}


@pytest.fixture
def geocode_response() -> dict[str, Any]:
    """Open-Meteo geocoding response with a single New Delhi match."""
    return copy.deepcopy(_GEOCODE_NEW_DELHI)


@pytest.fixture
def reverse_response() -> dict[str, Any]:
    """Nominatim reverse lookup response for central Pune."""
    return copy.deepcopy(_REVERSE_PUNE)


@pytest.fixture
def forecast_response() -> dict[str, Any]:
    """Open-Meteo forecast response: current block plus a 7-day daily block."""
    return copy.deepcopy(_FORECAST_NEW_DELHI)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def new_delhi() -> PlaceDescriptor:
    return PlaceDescriptor(name="New Delhi", country="India", latitude=28.61, longitude=77.21)


@pytest.fixture
def pune() -> PlaceDescriptor:
    return PlaceDescriptor(name="Pune", country="India", latitude=18.52, longitude=73.86)
