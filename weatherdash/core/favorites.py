"""Favorite places, persisted as a JSON list under one storage key.

Every mutation is written through to storage before the call returns;
the in-memory list and the stored value never disagree.
"""

from __future__ import annotations

import json

from weatherdash.storage import KeyValueStorage
from weatherdash.utils.logger import get_logger

logger = get_logger("favorites")

FAVORITES_KEY = "weatherFavs"


class FavoritesStore:
    """Ordered, duplicate-free set of favorite place names."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._favorites: list[str] | None = None

    def load(self) -> list[str]:
        """Read favorites from storage. Never raises; bad data reads as empty."""
        favorites = self._read()
        self._favorites = favorites
        logger.debug("favorites_loaded", count=len(favorites))
        return list(favorites)

    def _current(self) -> list[str]:
        # Mutating before load() must not overwrite what is already stored
        if self._favorites is None:
            return self.load()
        return self._favorites

    def _read(self) -> list[str]:
        try:
            raw = self._storage.get(FAVORITES_KEY)
        except OSError as e:
            logger.warning("favorites_read_failed", error=str(e))
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("favorites_malformed", raw=raw[:200])
            return []
        if not isinstance(data, list):
            logger.warning("favorites_malformed", raw=raw[:200])
            return []

        result: list[str] = []
        for item in data:
            if isinstance(item, str) and item not in result:
                result.append(item)
        return result

    def _persist(self, favorites: list[str]) -> None:
        # Write first so a storage failure leaves memory untouched
        self._storage.set(FAVORITES_KEY, json.dumps(favorites, ensure_ascii=False))
        self._favorites = favorites

    def add(self, place: str) -> None:
        favorites = self._current()
        if place in favorites:
            return
        self._persist([*favorites, place])
        logger.info("favorite_added", place=place)

    def remove(self, place: str) -> None:
        favorites = self._current()
        if place not in favorites:
            return
        self._persist([f for f in favorites if f != place])
        logger.info("favorite_removed", place=place)

    def toggle(self, place: str) -> bool:
        """Flip membership of ``place``. Returns True if it is now a favorite."""
        if self.contains(place):
            self.remove(place)
            return False
        self.add(place)
        return True

    def contains(self, place: str) -> bool:
        return place in self._current()

    def list(self) -> list[str]:
        return list(self._current())

    def __len__(self) -> int:
        return len(self._current())
