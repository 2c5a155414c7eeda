"""CLI dashboard for terminal weather display.

Plain text rendering of a DashboardView: current conditions, the five-day
forecast, favorites, and loading/error status.

No external TUI library, plain str formatting only.
"""

from __future__ import annotations

import sys
from typing import TextIO

from weatherdash.core.theme import DARK
from weatherdash.dashboard.controller import DashboardView
from weatherdash.dashboard.presenter import WeatherView

# Text stand-ins for the icon artwork, keyed by icon base (without d/n suffix)
ICON_GLYPHS: dict[str, str] = {
    "01": "☀",
    "02": "🌤",
    "03": "⛅",
    "04": "☁",
    "09": "🌦",
    "10": "🌧",
    "11": "⛈",
    "13": "❄",
    "50": "🌫",
}


def icon_glyph(icon_key: str) -> str:
    if icon_key == "01n":
        return "☾"
    return ICON_GLYPHS.get(icon_key[:2], "?")


class CLIDashboard:
    """Terminal renderer for the weather dashboard.

    Renders plain text blocks showing:
    - Status line (loading / error)
    - Current conditions for the active place
    - Five-day forecast table
    - Favorites list with the current place marked
    """

    SEPARATOR = "=" * 60

    def __init__(self, stream: TextIO | None = None, show_loading: bool = False) -> None:
        self._stream = stream
        self._show_loading = show_loading

    def __call__(self, view: DashboardView) -> None:
        """Renderer callback: print the view unless it is only a loading frame."""
        if view.loading and not self._show_loading:
            return
        stream = self._stream or sys.stdout
        print(self.render(view), file=stream)

    def render(self, view: DashboardView) -> str:
        """Render the full dashboard as a string."""
        sections: list[str] = []

        theme_tag = "[dark]" if view.theme == DARK else "[light]"
        sections.append(f"\n{self.SEPARATOR}\n  WEATHER DASHBOARD {theme_tag}\n{self.SEPARATOR}")

        status = self.format_status(view)
        if status:
            sections.append(status)

        if view.weather is not None:
            sections.append(self.format_current(view.weather, view.favorite_active))
            sections.append(self.format_forecast(view.weather))

        sections.append(self.format_favorites(view.favorites))
        sections.append(self.SEPARATOR)
        return "\n".join(sections)

    def format_status(self, view: DashboardView) -> str:
        lines = []
        if view.loading:
            lines.append("  Loading...")
        if view.error:
            lines.append(f"  ! {view.error}")
        return "\n".join(lines)

    def format_current(self, weather: WeatherView, favorite_active: bool) -> str:
        star = "★" if favorite_active else "☆"
        lines = [f"\n  {star} {weather.place_label}", f"  {weather.date_line}", "  " + "-" * 56]

        lines.append(f"  {icon_glyph(weather.icon_key)}  {weather.temperature}  {weather.condition}")
        lines.append(f"  Humidity:      {weather.humidity:>10}")
        lines.append(f"  Wind:          {weather.wind:>10}")
        lines.append(f"  Feels like:    {weather.feels_like:>10}")
        lines.append(f"  Visibility:    {weather.visibility:>10}")

        return "\n".join(lines)

    def format_forecast(self, weather: WeatherView) -> str:
        lines = ["\n  FORECAST", "  " + "-" * 56]
        header = f"  {'Day'.ljust(14)}{''.ljust(4)}{'Max'.ljust(8)}{'Min'.ljust(8)}{'Condition'.ljust(22)}"
        lines.append(header)
        lines.append("  " + "-" * 56)

        for card in weather.forecast:
            lines.append(
                f"  {card.date_label.ljust(14)}"
                f"{icon_glyph(card.icon_key).ljust(4)}"
                f"{card.max_temp.ljust(8)}"
                f"{card.min_temp.ljust(8)}"
                f"{card.condition.ljust(22)}"
            )

        return "\n".join(lines)

    def format_favorites(self, favorites: list[str]) -> str:
        lines = ["\n  FAVORITES", "  " + "-" * 56]
        if not favorites:
            lines.append("  No favorites added yet.")
        for name in favorites:
            lines.append(f"  - {name}")
        return "\n".join(lines)
