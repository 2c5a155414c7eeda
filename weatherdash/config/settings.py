"""Configuration management using Pydantic Settings with YAML overlay.

Loading priority: .env → config/settings.yaml → config/settings.{MODE}.yaml
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from weatherdash.core.models import UnitSystem

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_CONFIG_DIR = _PROJECT_ROOT / "config"

DEFAULT_STORAGE_PATH = Path.home() / ".weatherdash" / "storage.json"


# --- Nested config models ---


class ServicesConfig(BaseModel):
    """Remote service endpoints (all free, no API key)."""

    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    reverse_geocoding_url: str = "https://nominatim.openstreetmap.org/reverse"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    language: str = "en"
    # Nominatim rejects requests without an identifying User-Agent
    user_agent: str = "weatherdash/1.0 (+https://github.com/weatherdash/weatherdash)"


class HttpConfig(BaseModel):
    """Timeout and retry policy shared by every connector."""

    timeout_s: float = 10.0
    max_retries: int = 2
    retry_base_delay_s: float = 0.5


class GeolocationConfig(BaseModel):
    """Device position source. Unset coordinates mean geolocation is unavailable."""

    latitude: float | None = None
    longitude: float | None = None
    timeout_s: float = 10.0


# --- Main config class ---


class DashConfig(BaseSettings):
    """Main configuration for the weather dashboard."""

    # Runtime
    mode: str = Field(default="prod", alias="MODE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Session defaults
    default_place: str = "New Delhi"
    default_units: UnitSystem = UnitSystem.METRIC

    # Persistent key-value storage (favorites, theme)
    storage_path: Path = Field(default=DEFAULT_STORAGE_PATH, alias="WEATHERDASH_STORAGE")

    # Nested config (loaded from YAML)
    services: ServicesConfig = ServicesConfig()
    http: HttpConfig = HttpConfig()
    geolocation: GeolocationConfig = GeolocationConfig()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge overlay into base dict. Overlay values win."""
    merged = base.copy()
    for key, value in overlay.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=1)
def get_config() -> DashConfig:
    """Load and return the singleton DashConfig.

    Loading priority: .env → settings.yaml → settings.{MODE}.yaml
    """
    mode = os.getenv("MODE", "prod")

    base_yaml = _load_yaml(_CONFIG_DIR / "settings.yaml")
    mode_yaml = _load_yaml(_CONFIG_DIR / f"settings.{mode}.yaml")

    merged = _deep_merge(base_yaml, mode_yaml)

    # Keys absent from YAML fall back to env vars via pydantic-settings
    return DashConfig(**merged)
