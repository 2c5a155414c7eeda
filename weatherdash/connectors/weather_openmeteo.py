"""Open-Meteo forecast connector: current conditions plus a five-day forecast.

Uses api.open-meteo.com: free, no API key, no authentication.
Unit conversion is left to the API: imperial requests carry explicit unit
overrides, metric requests use the API defaults.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any

from weatherdash.connectors.base import JsonHttpClient
from weatherdash.core.errors import MalformedResponseError
from weatherdash.core.models import (
    FORECAST_DAYS,
    CurrentConditions,
    DailyForecastEntry,
    UnitSystem,
    WeatherReport,
)
from weatherdash.utils.logger import get_logger

logger = get_logger("weather_openmeteo")

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "weather_code",
    "wind_speed_10m",
    "visibility",
)
DAILY_FIELDS = ("weather_code", "temperature_2m_max", "temperature_2m_min")

_IMPERIAL_PARAMS = {
    "temperature_unit": "fahrenheit",
    "wind_speed_unit": "mph",
    "precipitation_unit": "inch",
}

_FEET_TO_KM = 0.0003048


def build_params(latitude: float, longitude: float, unit: UnitSystem) -> dict[str, str]:
    """Query parameters for a combined current + daily request."""
    params = {
        "latitude": str(latitude),
        "longitude": str(longitude),
        "current": ",".join(CURRENT_FIELDS),
        "daily": ",".join(DAILY_FIELDS),
        "timezone": "auto",
    }
    if unit is UnitSystem.IMPERIAL:
        params.update(_IMPERIAL_PARAMS)
    return params


class OpenMeteoWeatherClient(JsonHttpClient):
    """Async client for the Open-Meteo forecast API."""

    service_name = "weather"

    def __init__(self, base_url: str = FORECAST_URL, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._base_url = base_url

    async def fetch(self, latitude: float, longitude: float, unit: UnitSystem) -> WeatherReport:
        """Fetch current conditions and the next five days.

        Raises:
            NetworkError: Transport failure, timeout or non-200 status.
            MalformedResponseError: Missing blocks/fields or fewer than five days.
        """
        logger.info("weather_fetch", lat=latitude, lon=longitude, unit=unit.value)
        data = await self._get_json(self._base_url, build_params(latitude, longitude, unit))
        report = parse_report(data, unit)
        logger.info(
            "weather_fetched",
            lat=latitude,
            lon=longitude,
            unit=unit.value,
            weather_code=report.current.weather_code,
        )
        return report


def parse_report(data: Any, unit: UnitSystem) -> WeatherReport:
    """Parse an Open-Meteo response into a WeatherReport."""
    if not isinstance(data, dict):
        raise MalformedResponseError("weather response is not an object")
    current = _block(data, "current")
    daily = _block(data, "daily")
    current_units = data.get("current_units")
    visibility_unit = current_units.get("visibility") if isinstance(current_units, dict) else None
    offset = data.get("utc_offset_seconds")

    return WeatherReport(
        current=_parse_current(current, visibility_unit),
        forecast=_parse_daily(daily),
        unit=unit,
        fetched_at=datetime.now(timezone.utc),
        utc_offset_seconds=offset if isinstance(offset, int) and not isinstance(offset, bool) else 0,
    )


def _block(data: dict[str, Any], name: str) -> dict[str, Any]:
    block = data.get(name)
    if not isinstance(block, dict):
        raise MalformedResponseError(f"weather response has no '{name}' block")
    return block


def _number(block: dict[str, Any], key: str) -> float:
    value = block.get(key)
    # bool is an int subclass; the API never sends it for numeric fields
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise MalformedResponseError(f"weather field '{key}' is missing or not a number")
    return float(value)


def _parse_current(current: dict[str, Any], visibility_unit: str | None) -> CurrentConditions:
    visibility = _number(current, "visibility")
    if visibility_unit == "ft":
        visibility_km = visibility * _FEET_TO_KM
    else:
        visibility_km = visibility / 1000

    return CurrentConditions(
        temperature=_number(current, "temperature_2m"),
        feels_like=_number(current, "apparent_temperature"),
        humidity_percent=_number(current, "relative_humidity_2m"),
        wind_speed=_number(current, "wind_speed_10m"),
        visibility_km=visibility_km,
        weather_code=int(_number(current, "weather_code")),
        is_day=bool(_number(current, "is_day")),
    )


def _parse_daily(daily: dict[str, Any]) -> list[DailyForecastEntry]:
    series = {}
    for key in ("time", *DAILY_FIELDS):
        values = daily.get(key)
        if not isinstance(values, list):
            raise MalformedResponseError(f"weather daily field '{key}' is missing")
        series[key] = values

    available = min(len(values) for values in series.values())
    if available < FORECAST_DAYS:
        raise MalformedResponseError(
            f"weather forecast has {available} days, need {FORECAST_DAYS}"
        )

    entries = []
    for i in range(FORECAST_DAYS):
        row = {key: values[i] for key, values in series.items()}
        try:
            day = date.fromisoformat(row["time"])
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"weather daily date '{row['time']}' is invalid") from e
        entries.append(
            DailyForecastEntry(
                date=day,
                max_temp=_number(row, "temperature_2m_max"),
                min_temp=_number(row, "temperature_2m_min"),
                weather_code=int(_number(row, "weather_code")),
            )
        )
    return entries
