"""Persisted set of favourite catalogue prompt ids.

Updates:
  v0.1.1 - 2026-10-01 - Publish store events and return persistence results.
  v0.1.0 - 2026-09-24 - Introduce favourites store with toggle semantics.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from .events import StoreChange, StoreEvent, StoreObservers
from .persistence import PersistResult, read_json_item, write_json_item

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .events import StoreSubscription
    from .storage import KeyValueStorage

logger = logging.getLogger("prompt_vault.favorites")

DEFAULT_FAVORITES_KEY = "pv_favorites"

__all__ = ["DEFAULT_FAVORITES_KEY", "FavoritesStore"]


class FavoritesStore:
    """Track favourite prompt ids and write them through after every toggle.

    The persisted form is a JSON object mapping ids to ``true``. Only ids with a
    ``true`` marker count as favourites; anything else is dropped on load.
    """

    name = "favorites"

    def __init__(self, storage: KeyValueStorage, *, key: str = DEFAULT_FAVORITES_KEY) -> None:
        self._storage = storage
        self._key = key
        self._observers = StoreObservers()
        self._favorites: dict[str, bool] = self.load()
        self.last_persist: PersistResult | None = None

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> dict[str, bool]:
        """Return the persisted favourites, or an empty mapping on any failure."""
        payload = read_json_item(self._storage, self._key)
        if payload is None:
            return {}
        if not isinstance(payload, Mapping):
            logger.warning("Ignoring favourites under %s: expected a JSON object", self._key)
            return {}
        mapping = cast("Mapping[object, Any]", payload)
        return {str(prompt_id): True for prompt_id, marker in mapping.items() if marker is True}

    def reload(self) -> None:
        """Replace in-memory favourites with the persisted state."""
        self._favorites = self.load()
        self._observers.publish(
            StoreEvent(store=self.name, change=StoreChange.LOADED, item_id=None)
        )

    def save(self, favorites: Mapping[str, bool] | None = None) -> PersistResult:
        """Persist *favorites* (defaults to the current set) without raising."""
        snapshot = dict(self._favorites if favorites is None else favorites)
        result = write_json_item(self._storage, self._key, snapshot)
        self.last_persist = result
        return result

    def is_favorite(self, prompt_id: str) -> bool:
        """Return ``True`` when *prompt_id* is marked as a favourite."""
        return self._favorites.get(prompt_id) is True

    def toggle(self, prompt_id: str) -> bool:
        """Flip membership of *prompt_id*, persist, and return the new state."""
        if self.is_favorite(prompt_id):
            del self._favorites[prompt_id]
            change = StoreChange.REMOVED
        else:
            self._favorites[prompt_id] = True
            change = StoreChange.ADDED
        result = self.save()
        self._observers.publish(
            StoreEvent(store=self.name, change=change, item_id=prompt_id, persisted=result)
        )
        return change is StoreChange.ADDED

    def ids(self) -> list[str]:
        """Return favourite ids in the order they were added."""
        return list(self._favorites)

    def snapshot(self) -> dict[str, bool]:
        """Return a copy of the favourites mapping."""
        return dict(self._favorites)

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> StoreSubscription:
        """Register *callback* for events emitted after each mutation."""
        return self._observers.subscribe(callback)

    def __contains__(self, prompt_id: object) -> bool:
        return isinstance(prompt_id, str) and self.is_favorite(prompt_id)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._favorites))

    def __len__(self) -> int:
        return len(self._favorites)
