"""Turns a place and a weather report into display-ready strings.

Temperatures and wind are rounded half-up to whole numbers, visibility is
shown in km with one decimal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta

from weatherdash.core.models import PlaceDescriptor, UnitSystem, WeatherReport
from weatherdash.core.weather_codes import classify


@dataclass(frozen=True)
class ForecastCardView:
    date_label: str  # e.g. "Mon, Mar 2"
    max_temp: str
    min_temp: str
    condition: str
    icon_key: str


@dataclass(frozen=True)
class WeatherView:
    place_label: str
    date_line: str
    temperature: str
    condition: str
    icon_key: str
    humidity: str
    wind: str
    feels_like: str
    visibility: str
    unit: UnitSystem
    forecast: list[ForecastCardView] = field(default_factory=list)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_temperature(value: float) -> str:
    return f"{round_half_up(value)}°"


def present(place: PlaceDescriptor, report: WeatherReport, today: date | None = None) -> WeatherView:
    current = report.current
    condition = classify(current.weather_code, current.is_day)
    if today is None:
        # Date at the place, not at UTC
        today = (report.fetched_at + timedelta(seconds=report.utc_offset_seconds)).date()

    cards = []
    for entry in report.forecast:
        # Forecast cards always use the day icon
        info = classify(entry.weather_code, True)
        cards.append(
            ForecastCardView(
                date_label=f"{entry.date:%a}, {entry.date:%b} {entry.date.day}",
                max_temp=format_temperature(entry.max_temp),
                min_temp=format_temperature(entry.min_temp),
                condition=info.description,
                icon_key=info.icon_key,
            )
        )

    return WeatherView(
        place_label=place.label,
        date_line=f"{today:%A}, {today:%B} {today.day}, {today.year}",
        temperature=format_temperature(current.temperature),
        condition=condition.description,
        icon_key=condition.icon_key,
        humidity=f"{round_half_up(current.humidity_percent)}%",
        wind=f"{round_half_up(current.wind_speed)} {report.unit.wind_speed_label}",
        feels_like=format_temperature(current.feels_like),
        visibility=f"{current.visibility_km:.1f} km",
        unit=report.unit,
        forecast=cards,
    )
