"""Shared Pydantic models for places and weather data.

Produced by the location resolver and the weather connector, consumed by the
dashboard controller and presenter.
"""

from __future__ import annotations

from datetime import date as date_type  # noqa: TC003
from datetime import datetime  # noqa: TC003
from enum import Enum

from pydantic import BaseModel, Field

# Name used when coordinates cannot be turned into a place name
FALLBACK_PLACE_NAME = "Your Location"

FORECAST_DAYS = 5


class UnitSystem(str, Enum):
    """Measurement system requested from the weather service."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    def flipped(self) -> UnitSystem:
        return UnitSystem.IMPERIAL if self is UnitSystem.METRIC else UnitSystem.METRIC

    @property
    def wind_speed_label(self) -> str:
        return "km/h" if self is UnitSystem.METRIC else "mph"

    @property
    def temperature_label(self) -> str:
        return "°C" if self is UnitSystem.METRIC else "°F"


class PlaceDescriptor(BaseModel):
    """Canonical place: display name plus coordinates."""

    model_config = {"frozen": True}

    name: str
    country: str = ""
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @property
    def label(self) -> str:
        """Display label, e.g. 'New Delhi, India' or 'Your Location'."""
        return f"{self.name}, {self.country}" if self.country else self.name


class CurrentConditions(BaseModel):
    """Current conditions, in the units the report was requested in."""

    temperature: float
    feels_like: float
    humidity_percent: float
    wind_speed: float
    visibility_km: float
    weather_code: int
    is_day: bool


class DailyForecastEntry(BaseModel):
    """Single day's forecast."""

    date: date_type
    max_temp: float
    min_temp: float
    weather_code: int


class WeatherReport(BaseModel):
    """Current conditions plus the next five days, from a single fetch."""

    current: CurrentConditions
    forecast: list[DailyForecastEntry] = Field(min_length=FORECAST_DAYS, max_length=FORECAST_DAYS)
    unit: UnitSystem
    fetched_at: datetime
    # Offset of the place's local time from UTC
    utc_offset_seconds: int = 0
