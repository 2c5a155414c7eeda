"""Device position sources.

A geolocator either yields (latitude, longitude) or raises
PermissionDeniedError. Timeouts are applied by the caller.
"""

from __future__ import annotations

from typing import Protocol

from weatherdash.core.errors import PermissionDeniedError


class Geolocator(Protocol):
    async def locate(self) -> tuple[float, float]: ...


class StaticGeolocator:
    """Fixed position, e.g. from configuration or ``--lat/--lon``."""

    def __init__(self, latitude: float, longitude: float) -> None:
        if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
            raise ValueError(f"Invalid coordinates: {latitude}, {longitude}")
        self._position = (latitude, longitude)

    async def locate(self) -> tuple[float, float]:
        return self._position


class UnavailableGeolocator:
    """No position source; every request is denied."""

    async def locate(self) -> tuple[float, float]:
        raise PermissionDeniedError()


def geolocator_for(latitude: float | None, longitude: float | None) -> Geolocator:
    if latitude is None or longitude is None:
        return UnavailableGeolocator()
    return StaticGeolocator(latitude, longitude)
