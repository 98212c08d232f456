"""Persisted collection of user-authored prompts.

Custom prompts get random ids prefixed with ``c`` so they never collide with
content-derived catalogue ids (``p`` prefix). Records are kept in insertion
order, newest last, and the persisted list is the single source of truth.

Updates:
  v0.1.3 - 2026-10-18 - Raise PromptIdExhaustedError when id generation keeps colliding.
  v0.1.2 - 2026-10-03 - Inject id generator and clock so tests can pin ids and timestamps.
  v0.1.1 - 2026-10-01 - Publish store events and return persistence results.
  v0.1.0 - 2026-09-25 - Introduce custom prompt store with add/remove.
"""

from __future__ import annotations

import logging
import random
import secrets
import time
from typing import TYPE_CHECKING, Any, Final, cast

from models.catalog_model import CustomPrompt

from .events import StoreChange, StoreEvent, StoreObservers
from .exceptions import PromptIdExhaustedError
from .identity import to_base36
from .persistence import PersistResult, read_json_item, write_json_item

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping, Sequence

    from .events import StoreSubscription
    from .storage import KeyValueStorage

logger = logging.getLogger("prompt_vault.custom_prompts")

DEFAULT_CUSTOM_PROMPTS_KEY: Final[str] = "pv_custom"
CUSTOM_ID_PREFIX: Final[str] = "c"
_CUSTOM_ID_LENGTH: Final[int] = 11
_MAX_ID_ATTEMPTS: Final[int] = 16

__all__ = [
    "CUSTOM_ID_PREFIX",
    "DEFAULT_CUSTOM_PROMPTS_KEY",
    "CustomIdGenerator",
    "CustomPromptStore",
]


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class CustomIdGenerator:
    """Draw ``c``-prefixed base-36 ids from an injectable random source.

    Eleven base-36 characters give roughly 2**56 possible ids. The default
    source is the operating system CSPRNG; pass a seeded :class:`random.Random`
    for reproducible ids.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        length: int = _CUSTOM_ID_LENGTH,
    ) -> None:
        self._rng = rng if rng is not None else secrets.SystemRandom()
        self._length = length

    def __call__(self) -> str:
        upper = 36**self._length
        body = to_base36(self._rng.randrange(upper)).rjust(self._length, "0")
        return f"{CUSTOM_ID_PREFIX}{body}"


class CustomPromptStore:
    """Own the persisted list of :class:`CustomPrompt` records."""

    name = "custom_prompts"

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_CUSTOM_PROMPTS_KEY,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._id_factory = id_factory or CustomIdGenerator()
        self._clock = clock or _epoch_millis
        self._observers = StoreObservers()
        self._records: list[CustomPrompt] = self.load()
        self.last_persist: PersistResult | None = None

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[CustomPrompt]:
        """Return persisted records, skipping malformed rows; empty on failure."""
        payload = read_json_item(self._storage, self._key)
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning("Ignoring custom prompts under %s: expected a JSON array", self._key)
            return []
        records: list[CustomPrompt] = []
        seen: set[str] = set()
        for raw in cast("list[object]", payload):
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object custom prompt entry under %s", self._key)
                continue
            try:
                record = CustomPrompt.from_record(cast("Mapping[str, Any]", raw))
            except ValueError as exc:
                logger.warning("Skipping malformed custom prompt: %s", exc)
                continue
            if record.id in seen:
                logger.warning("Skipping duplicate custom prompt id %s", record.id)
                continue
            seen.add(record.id)
            records.append(record)
        return records

    def reload(self) -> None:
        """Replace in-memory records with the persisted state."""
        self._records = self.load()
        self._observers.publish(
            StoreEvent(store=self.name, change=StoreChange.LOADED, item_id=None)
        )

    def save(self, records: Sequence[CustomPrompt] | None = None) -> PersistResult:
        """Persist *records* (defaults to the current list) without raising."""
        rows = [record.to_record() for record in (self._records if records is None else records)]
        result = write_json_item(self._storage, self._key, rows)
        self.last_persist = result
        return result

    def _next_id(self) -> str:
        existing = {record.id for record in self._records}
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in existing:
                return candidate
        raise PromptIdExhaustedError(
            f"No unused custom prompt id after {_MAX_ID_ATTEMPTS} attempts"
        )

    def add(self, *, tab: str, section: str, category: str, text: str) -> CustomPrompt:
        """Append a new custom prompt, persist the list, and return the record."""
        record = CustomPrompt(
            id=self._next_id(),
            tab=tab,
            section=section,
            category=category,
            text=text,
            created_at=int(self._clock()),
        )
        self._records.append(record)
        result = self.save()
        self._observers.publish(
            StoreEvent(
                store=self.name,
                change=StoreChange.ADDED,
                item_id=record.id,
                persisted=result,
            )
        )
        return record

    def remove(self, prompt_id: str) -> bool:
        """Delete the record with *prompt_id*; return ``False`` when it was absent."""
        remaining = [record for record in self._records if record.id != prompt_id]
        removed = len(remaining) != len(self._records)
        self._records = remaining
        result = self.save()
        if removed:
            self._observers.publish(
                StoreEvent(
                    store=self.name,
                    change=StoreChange.REMOVED,
                    item_id=prompt_id,
                    persisted=result,
                )
            )
        return removed

    def get(self, prompt_id: str) -> CustomPrompt | None:
        """Return the record with *prompt_id* when present."""
        for record in self._records:
            if record.id == prompt_id:
                return record
        return None

    def records(self) -> list[CustomPrompt]:
        """Return a copy of the records, oldest first."""
        return list(self._records)

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> StoreSubscription:
        """Register *callback* for events emitted after each mutation."""
        return self._observers.subscribe(callback)

    def __contains__(self, prompt_id: object) -> bool:
        return isinstance(prompt_id, str) and self.get(prompt_id) is not None

    def __iter__(self) -> Iterator[CustomPrompt]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)
