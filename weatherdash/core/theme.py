"""Dark/light theme preference, persisted under the ``theme`` key."""

from __future__ import annotations

from weatherdash.storage import KeyValueStorage
from weatherdash.utils.logger import get_logger

logger = get_logger("theme")

THEME_KEY = "theme"
DARK = "dark"
LIGHT = "light"


class ThemeStore:
    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._theme = LIGHT

    @property
    def theme(self) -> str:
        return self._theme

    def load(self) -> str:
        try:
            stored = self._storage.get(THEME_KEY)
        except OSError as e:
            logger.warning("theme_read_failed", error=str(e))
            stored = None
        self._theme = DARK if stored == DARK else LIGHT
        return self._theme

    def toggle(self) -> str:
        new_theme = LIGHT if self._theme == DARK else DARK
        self._storage.set(THEME_KEY, new_theme)
        self._theme = new_theme
        logger.info("theme_changed", theme=new_theme)
        return new_theme
