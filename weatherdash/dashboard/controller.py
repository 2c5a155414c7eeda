"""Dashboard controller: drives resolve → fetch → render for user actions.

Lifecycle: ``startup()`` once, then any of ``search()``, ``locate()``,
``toggle_unit()``, ``toggle_favorite()`` (plus favorites/theme helpers),
then ``aclose()``.

Architecture:
- One SessionState (current place + unit) and one DashboardView per controller
- Network actions are serialized by an asyncio.Lock, so two resolve+fetch
  cycles never interleave
- Every action returns an ActionResult; errors never propagate past here
- Place and report are committed together, only after both succeeded
- ``loading`` is reset on every exit path
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from weatherdash.core.errors import ErrorKind, PermissionDeniedError, WeatherDashError
from weatherdash.core.favorites import FavoritesStore
from weatherdash.core.geolocation import Geolocator
from weatherdash.core.location import LocationResolver
from weatherdash.core.models import PlaceDescriptor, UnitSystem, WeatherReport
from weatherdash.core.theme import LIGHT, ThemeStore
from weatherdash.dashboard.presenter import WeatherView, present
from weatherdash.utils.logger import get_logger

logger = get_logger("controller")

_UNEXPECTED_MESSAGE = "Something went wrong"


class WeatherFetcher(Protocol):
    async def fetch(self, latitude: float, longitude: float, unit: UnitSystem) -> WeatherReport: ...


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass
class SessionState:
    """Per-session state. Never persisted."""

    current_place: PlaceDescriptor | None = None
    current_unit: UnitSystem = UnitSystem.METRIC


@dataclass
class DashboardView:
    """Everything a renderer needs to draw the dashboard."""

    loading: bool = False
    error: str | None = None
    weather: WeatherView | None = None
    favorite_active: bool = False
    favorites: list[str] = field(default_factory=list)
    theme: str = LIGHT


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a controller action."""

    ok: bool
    error_kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def success(cls) -> ActionResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> ActionResult:
        return cls(ok=False, error_kind=kind, message=message)


Renderer = Callable[[DashboardView], None]


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class DashboardController:
    """Orchestrates location resolution, weather fetches and favorites.

    Args:
        resolver: Place name / coordinate resolution.
        fetcher: Weather source.
        geolocator: Device position source.
        favorites: Favorites store (loaded in ``startup()``).
        theme: Theme preference store (loaded in ``startup()``).
        default_place: Place searched at startup when geolocation fails.
        unit: Initial unit system.
        geolocation_timeout_s: Upper bound on waiting for a device position.
        renderer: Called with the view after every change.
        closeables: Objects with an async ``close()`` released by ``aclose()``.
    """

    def __init__(
        self,
        resolver: LocationResolver,
        fetcher: WeatherFetcher,
        geolocator: Geolocator,
        favorites: FavoritesStore,
        theme: ThemeStore,
        default_place: str = "New Delhi",
        unit: UnitSystem = UnitSystem.METRIC,
        geolocation_timeout_s: float = 10.0,
        renderer: Renderer | None = None,
        closeables: Iterable[Any] = (),
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._geolocator = geolocator
        self._favorites = favorites
        self._theme = theme
        self._default_place = default_place
        self._geolocation_timeout_s = geolocation_timeout_s
        self._renderer = renderer
        self._closeables = list(closeables)

        self._session = SessionState(current_unit=unit)
        self._view = DashboardView()
        self._lock = asyncio.Lock()

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def view(self) -> DashboardView:
        return self._view

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def load_preferences(self) -> None:
        """Read favorites and theme from storage into the view."""
        self._view.favorites = self._favorites.load()
        self._view.theme = self._theme.load()

    async def startup(self) -> ActionResult:
        """Load preferences, then show weather for the device or the default place."""
        self.load_preferences()

        async def pipeline() -> None:
            try:
                latitude, longitude = await self._locate_device()
            except PermissionDeniedError:
                logger.info("startup_default_place", place=self._default_place)
                place = await self._resolver.resolve_by_name(self._default_place)
            else:
                place = await self._resolver.resolve_by_coordinates(latitude, longitude)
            await self._fetch_and_commit(place)

        return await self._run("startup", pipeline)

    async def search(self, query: str) -> ActionResult:
        """Show weather for a place name. Empty queries do nothing."""
        query = query.strip()
        if not query:
            return ActionResult.success()

        async def pipeline() -> None:
            place = await self._resolver.resolve_by_name(query)
            await self._fetch_and_commit(place)

        return await self._run("search", pipeline)

    async def select_favorite(self, name: str) -> ActionResult:
        return await self.search(name)

    async def locate(self) -> ActionResult:
        """Show weather for the device position; denial is reported, not hidden."""

        async def pipeline() -> None:
            latitude, longitude = await self._locate_device()
            place = await self._resolver.resolve_by_coordinates(latitude, longitude)
            await self._fetch_and_commit(place)

        return await self._run("locate", pipeline)

    async def toggle_unit(self) -> ActionResult:
        """Flip metric/imperial and re-fetch the current place, if any."""
        async with self._lock:
            self._session.current_unit = self._session.current_unit.flipped()
            logger.info("unit_toggled", unit=self._session.current_unit.value)
            place = self._session.current_place
            if place is None:
                self._render()
                return ActionResult.success()
            return await self._run_locked("toggle_unit", lambda: self._fetch_and_commit(place))

    def toggle_favorite(self) -> ActionResult:
        """Add or remove the current place from favorites."""
        place = self._session.current_place
        if place is None:
            return ActionResult.success()
        return self._update_favorites("toggle_favorite", lambda: self._favorites.toggle(place.name))

    def remove_favorite(self, name: str) -> ActionResult:
        return self._update_favorites("remove_favorite", lambda: self._favorites.remove(name))

    def toggle_theme(self) -> ActionResult:
        try:
            self._view.theme = self._theme.toggle()
        except OSError as e:
            logger.error("theme_save_failed", error=str(e))
            self._view.error = "Could not save theme"
            self._render()
            return ActionResult.failure(ErrorKind.UNEXPECTED, "Could not save theme")
        self._view.error = None
        self._render()
        return ActionResult.success()

    async def aclose(self) -> None:
        for closeable in self._closeables:
            await closeable.close()

    async def __aenter__(self) -> DashboardController:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _run(self, action: str, pipeline: Callable[[], Awaitable[None]]) -> ActionResult:
        async with self._lock:
            return await self._run_locked(action, pipeline)

    async def _run_locked(
        self, action: str, pipeline: Callable[[], Awaitable[None]]
    ) -> ActionResult:
        self._view.loading = True
        self._view.error = None
        self._render()

        result = ActionResult.success()
        try:
            await pipeline()
        except WeatherDashError as e:
            logger.warning("action_failed", action=action, kind=e.kind.value, error=str(e))
            self._view.error = e.user_message
            result = ActionResult.failure(e.kind, e.user_message)
        except Exception:
            logger.exception("action_crashed", action=action)
            self._view.error = _UNEXPECTED_MESSAGE
            result = ActionResult.failure(ErrorKind.UNEXPECTED, _UNEXPECTED_MESSAGE)
        finally:
            self._view.loading = False
            self._render()
        return result

    async def _locate_device(self) -> tuple[float, float]:
        try:
            return await asyncio.wait_for(
                self._geolocator.locate(), timeout=self._geolocation_timeout_s
            )
        except asyncio.TimeoutError as e:
            logger.warning("geolocation_timeout", timeout_s=self._geolocation_timeout_s)
            raise PermissionDeniedError() from e

    async def _fetch_and_commit(self, place: PlaceDescriptor) -> None:
        report = await self._fetcher.fetch(
            place.latitude, place.longitude, self._session.current_unit
        )
        self._session.current_place = place
        self._view.weather = present(place, report)
        self._view.favorite_active = self._favorites.contains(place.name)
        logger.info("dashboard_updated", place=place.label, unit=report.unit.value)

    def _update_favorites(self, action: str, mutate: Callable[[], object]) -> ActionResult:
        try:
            mutate()
        except OSError as e:
            logger.error("favorites_save_failed", action=action, error=str(e))
            self._view.error = "Could not save favorites"
            self._render()
            return ActionResult.failure(ErrorKind.UNEXPECTED, "Could not save favorites")

        place = self._session.current_place
        self._view.error = None
        self._view.favorites = self._favorites.list()
        self._view.favorite_active = place is not None and self._favorites.contains(place.name)
        self._render()
        return ActionResult.success()

    def _render(self) -> None:
        if self._renderer is not None:
            self._renderer(self._view)
