"""Wires configuration, connectors and stores into a DashboardController."""

from __future__ import annotations

from typing import Any

from weatherdash.config.settings import DashConfig
from weatherdash.connectors.geocoding import NominatimReverseGeocodingClient, OpenMeteoGeocodingClient
from weatherdash.connectors.weather_openmeteo import OpenMeteoWeatherClient
from weatherdash.core.favorites import FavoritesStore
from weatherdash.core.geolocation import Geolocator, geolocator_for
from weatherdash.core.location import LocationResolver
from weatherdash.core.models import UnitSystem
from weatherdash.core.theme import ThemeStore
from weatherdash.dashboard.controller import DashboardController, Renderer
from weatherdash.storage import JsonFileStorage, KeyValueStorage


def build_controller(
    config: DashConfig,
    storage: KeyValueStorage | None = None,
    geolocator: Geolocator | None = None,
    renderer: Renderer | None = None,
    unit: UnitSystem | None = None,
) -> DashboardController:
    """Create a controller with live connectors. Call ``aclose()`` when done."""
    http_kwargs: dict[str, Any] = {
        "timeout_s": config.http.timeout_s,
        "max_retries": config.http.max_retries,
        "retry_base_delay_s": config.http.retry_base_delay_s,
        "user_agent": config.services.user_agent,
    }
    forward = OpenMeteoGeocodingClient(
        base_url=config.services.geocoding_url,
        language=config.services.language,
        **http_kwargs,
    )
    reverse = NominatimReverseGeocodingClient(
        base_url=config.services.reverse_geocoding_url,
        language=config.services.language,
        **http_kwargs,
    )
    weather = OpenMeteoWeatherClient(base_url=config.services.forecast_url, **http_kwargs)

    storage = storage if storage is not None else JsonFileStorage(config.storage_path)
    if geolocator is None:
        geolocator = geolocator_for(config.geolocation.latitude, config.geolocation.longitude)

    return DashboardController(
        resolver=LocationResolver(forward, reverse),
        fetcher=weather,
        geolocator=geolocator,
        favorites=FavoritesStore(storage),
        theme=ThemeStore(storage),
        default_place=config.default_place,
        unit=unit or config.default_units,
        geolocation_timeout_s=config.geolocation.timeout_s,
        renderer=renderer,
        closeables=(forward, reverse, weather),
    )
