"""WMO weather interpretation codes → condition label and icon key.

Open-Meteo reports conditions as WMO codes. Codes are grouped into bands
(inclusive on both ends); every integer maps to something, unknown codes
fall back to a generic cloud icon.
"""

from __future__ import annotations

from dataclasses import dataclass

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon_key}@4x.png"


@dataclass(frozen=True)
class WeatherCondition:
    description: str
    icon_key: str  # e.g. "03d"


# (low, high, description, icon base)
_BANDS: tuple[tuple[int, int, str, str], ...] = (
    (0, 0, "Clear Sky", "01"),
    (1, 1, "Mainly Clear", "02"),
    (2, 2, "Partly Cloudy", "03"),
    (3, 3, "Overcast", "04"),
    (45, 48, "Fog", "50"),
    (51, 57, "Drizzle", "09"),
    (61, 67, "Rain", "10"),
    (71, 77, "Snow", "13"),
    (80, 82, "Rain Showers", "09"),
    (95, 99, "Thunderstorm", "11"),
)

_UNKNOWN = ("Unknown", "03")


def classify(code: int, is_day: bool) -> WeatherCondition:
    """Map a weather code to a description and a day/night icon key."""
    description, icon = _UNKNOWN
    for low, high, band_description, band_icon in _BANDS:
        if low <= code <= high:
            description, icon = band_description, band_icon
            break
    suffix = "d" if is_day else "n"
    return WeatherCondition(description=description, icon_key=f"{icon}{suffix}")


def icon_url(icon_key: str) -> str:
    """OpenWeatherMap image URL for an icon key."""
    return ICON_URL_TEMPLATE.format(icon_key=icon_key)
