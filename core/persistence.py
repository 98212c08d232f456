"""Best-effort JSON persistence helpers shared by the vault stores.

Reads fail closed: any storage or decoding problem yields ``None`` so callers
start from an empty collection. Writes never raise; they return a
:class:`PersistResult` describing the outcome so callers choose whether to log
or ignore a failed write. In-memory state is never rolled back.

Updates:
  v0.1.0 - 2026-09-24 - Introduce explicit persistence results.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import StorageError

if TYPE_CHECKING:
    from .storage import KeyValueStorage

logger = logging.getLogger("prompt_vault.persistence")

__all__ = ["PersistResult", "PersistStatus", "read_json_item", "write_json_item"]


class PersistStatus(str, Enum):
    """Outcome of a best-effort write."""

    SAVED = "saved"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PersistResult:
    """Result returned after attempting to persist a store."""

    key: str
    status: PersistStatus
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is PersistStatus.SAVED

    @classmethod
    def saved(cls, key: str) -> PersistResult:
        return cls(key=key, status=PersistStatus.SAVED)

    @classmethod
    def failed(cls, key: str, error: Exception) -> PersistResult:
        return cls(key=key, status=PersistStatus.FAILED, error=error)


def read_json_item(storage: KeyValueStorage, key: str) -> object | None:
    """Return the decoded JSON value stored under *key*, or ``None``."""
    try:
        raw = storage.get_item(key)
    except StorageError as exc:
        logger.warning("Unable to read %s from storage: %s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring corrupt JSON stored under %s: %s", key, exc)
        return None


def write_json_item(storage: KeyValueStorage, key: str, value: object) -> PersistResult:
    """Encode *value* as JSON and store it under *key* without raising."""
    try:
        payload = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        storage.set_item(key, payload)
    except (StorageError, TypeError, ValueError) as exc:
        logger.warning("Unable to persist %s: %s", key, exc)
        return PersistResult.failed(key, exc)
    return PersistResult.saved(key)
