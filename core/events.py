"""Change notifications for the favourites and custom prompt stores.

Updates:
  v0.1.0 - 2026-09-24 - Introduce store events with closable subscriptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from .persistence import PersistResult

logger = logging.getLogger("prompt_vault.events")

__all__ = ["StoreChange", "StoreEvent", "StoreObservers", "StoreSubscription"]


class StoreChange(str, Enum):
    """Kind of mutation that produced a store event."""

    LOADED = "loaded"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class StoreEvent:
    """Payload delivered to store observers after a mutation."""

    store: str
    change: StoreChange
    item_id: str | None
    persisted: PersistResult | None = None


class StoreSubscription:
    """Disposable handle that removes its callback when closed."""

    def __init__(self, observers: StoreObservers, callback: Callable[[StoreEvent], None]) -> None:
        self._observers = observers
        self._callback = callback
        self._closed = False

    def close(self) -> None:
        """Detach the stored callback if it is still active."""
        if self._closed:
            return
        self._closed = True
        self._observers.unsubscribe(self._callback)

    def __enter__(self) -> StoreSubscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class StoreObservers:
    """Ordered callback registry owned by a single store."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[StoreEvent], None]] = []

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> StoreSubscription:
        """Register *callback* to receive future store events."""
        self._callbacks.append(callback)
        return StoreSubscription(self, callback)

    def unsubscribe(self, callback: Callable[[StoreEvent], None]) -> None:
        """Remove a previously subscribed callback if present."""
        try:
            self._callbacks.remove(callback)
        except ValueError:
            pass

    def publish(self, event: StoreEvent) -> None:
        """Deliver *event* to every subscriber; observer errors are logged."""
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:  # pragma: no cover - keep other observers running
                logger.exception("Store observer failed for %s event", event.change.value)

    def __len__(self) -> int:
        return len(self._callbacks)
