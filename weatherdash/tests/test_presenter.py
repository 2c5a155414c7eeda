"""Tests for turning reports into display strings."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

import pytest

from weatherdash.connectors.weather_openmeteo import parse_report
from weatherdash.core.models import PlaceDescriptor, UnitSystem
from weatherdash.dashboard.presenter import present, round_half_up


class TestRounding:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(30.4, 30), (30.5, 31), (31.6, 32), (-0.5, 0), (-2.6, -3), (0.0, 0), (2.5, 3)],
    )
    def test_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestPresent:
    def test_current_block(self, new_delhi: PlaceDescriptor, forecast_response: dict[str, Any]) -> None:
        report = parse_report(forecast_response, UnitSystem.METRIC)
        view = present(new_delhi, report, today=date(2026, 3, 1))

        assert view.place_label == "New Delhi, India"
        assert view.date_line == "Sunday, March 1, 2026"
        assert view.temperature == "30°"
        assert view.condition == "Partly Cloudy"
        assert view.icon_key == "03d"
        assert view.humidity == "41%"
        assert view.wind == "12 km/h"
        assert view.feels_like == "32°"
        assert view.visibility == "24.1 km"
        assert view.unit == UnitSystem.METRIC

    def test_forecast_cards(self, new_delhi: PlaceDescriptor, forecast_response: dict[str, Any]) -> None:
        report = parse_report(forecast_response, UnitSystem.METRIC)
        view = present(new_delhi, report)

        assert [c.date_label for c in view.forecast] == [
            "Sun, Mar 1",
            "Mon, Mar 2",
            "Tue, Mar 3",
            "Wed, Mar 4",
            "Thu, Mar 5",
        ]
        assert [c.condition for c in view.forecast] == [
            "Partly Cloudy",
            "Clear Sky",
            "Overcast",
            "Rain",
            "Thunderstorm",
        ]
        assert view.forecast[0].max_temp == "31°"
        assert view.forecast[0].min_temp == "18°"

    def test_forecast_always_uses_day_icons(
        self, new_delhi: PlaceDescriptor, forecast_response: dict[str, Any]
    ) -> None:
        forecast_response["current"]["is_day"] = 0
        report = parse_report(forecast_response, UnitSystem.METRIC)
        view = present(new_delhi, report)

        assert view.icon_key == "03n"
        assert all(c.icon_key.endswith("d") for c in view.forecast)

    def test_imperial_wind_label(self, forecast_response: dict[str, Any]) -> None:
        place = PlaceDescriptor(name="Your Location", latitude=28.61, longitude=77.21)
        report = parse_report(forecast_response, UnitSystem.IMPERIAL)
        view = present(place, report)

        assert view.wind == "12 mph"
        assert view.place_label == "Your Location"

    def test_date_line_uses_local_date(
        self, new_delhi: PlaceDescriptor, forecast_response: dict[str, Any]
    ) -> None:
        report = parse_report(forecast_response, UnitSystem.METRIC).model_copy(
            update={"fetched_at": datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)}
        )
        view = present(new_delhi, report)

        # 20:00 UTC is 01:30 the next day at UTC+05:30
        assert view.date_line == "Monday, March 2, 2026"

    def test_date_line_without_offset_is_utc(
        self, new_delhi: PlaceDescriptor, forecast_response: dict[str, Any]
    ) -> None:
        del forecast_response["utc_offset_seconds"]
        report = parse_report(forecast_response, UnitSystem.METRIC).model_copy(
            update={"fetched_at": datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)}
        )
        assert present(new_delhi, report).date_line == "Sunday, March 1, 2026"
