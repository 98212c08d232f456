"""Key-value persistence backends for favourites and custom prompts.

Stores persist JSON-encoded strings under a single key each, mirroring the
browser ``localStorage`` contract the vault was designed around. Backends raise
:class:`~core.exceptions.StorageError`; stores decide how to degrade.

Updates:
  v0.2.1 - 2026-10-18 - Move corrupt storage files aside on write instead of failing forever.
  v0.2.0 - 2026-10-04 - Add Redis-backed storage for shared workstation setups.
  v0.1.1 - 2026-09-30 - Replace the JSON file atomically to avoid torn writes.
  v0.1.0 - 2026-09-23 - Introduce storage protocol with memory and JSON file backends.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, cast

from .exceptions import StorageCorruptError, StorageError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from redis import Redis

logger = logging.getLogger("prompt_vault.storage")

RedisValue = str | bytes | memoryview

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisClientProtocol",
    "RedisStorage",
    "build_redis_storage",
]


class KeyValueStorage(Protocol):
    """String key/value persistence used by the vault stores."""

    def get_item(self, key: str) -> str | None:
        """Return the stored string for *key* or ``None`` when absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete *key* when present."""
        ...


class MemoryStorage:
    """Process-local storage used for tests and ephemeral sessions."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored item."""
        return dict(self._items)


class JsonFileStorage:
    """Persist all keys inside one JSON object on disk.

    The file is re-read on every access so several sessions pointed at the same
    path observe each other's last completed write. Writes go to a temporary
    sibling file first and replace the target in one step.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            contents = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageCorruptError(f"Storage file is not UTF-8: {self._path}") from exc
        except OSError as exc:
            raise StorageError(f"Unable to read storage file: {self._path}") from exc
        if not contents.strip():
            return {}
        try:
            payload: object = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(f"Invalid JSON in storage file: {self._path}") from exc
        if not isinstance(payload, dict):
            raise StorageCorruptError(f"Storage file {self._path} must contain a JSON object")
        mapping = cast("dict[object, Any]", payload)
        return {str(key): value for key, value in mapping.items() if isinstance(value, str)}

    def _read_for_update(self) -> dict[str, str]:
        """Return current items, moving a corrupt file aside so writes start fresh."""
        try:
            return self._read_all()
        except StorageCorruptError as exc:
            backup = self._path.with_name(f"{self._path.name}.corrupt")
            try:
                os.replace(self._path, backup)
            except OSError as move_exc:
                raise StorageError(f"Unable to move aside corrupt file: {self._path}") from move_exc
            logger.warning("%s; moved it to %s and starting empty", exc, backup)
            return {}

    def _write_all(self, items: Mapping[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(dict(items), handle, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Unable to write storage file: {self._path}") from exc

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_update()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_for_update()
        if items.pop(key, None) is not None:
            self._write_all(items)


class RedisClientProtocol(Protocol):
    """Subset of redis-py client behaviour used by :class:`RedisStorage`."""

    def get(self, name: str) -> RedisValue | None:
        """Return the stored value when present."""
        ...

    def set(self, name: str, value: RedisValue) -> Any:
        """Store a value without expiry."""
        ...

    def delete(self, *names: str) -> int:
        """Remove one or more keys."""
        ...


class RedisStorage:
    """Persist vault keys in Redis under a shared namespace prefix."""

    def __init__(self, client: RedisClientProtocol, *, namespace: str = "prompt_vault:") -> None:
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    def get_item(self, key: str) -> str | None:
        try:
            value = self._client.get(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis read failed for {key}: {exc}") from exc
        if value is None:
            return None
        if isinstance(value, memoryview):
            value = value.tobytes()
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except Exception as exc:
            raise StorageError(f"Redis write failed for {key}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as exc:
            raise StorageError(f"Redis delete failed for {key}: {exc}") from exc


def build_redis_storage(redis_dsn: str, *, namespace: str = "prompt_vault:") -> RedisStorage:
    """Return a :class:`RedisStorage` connected to *redis_dsn*."""
    import redis

    client = cast("Redis", redis.Redis.from_url(redis_dsn))
    logger.debug("Using Redis storage at %s", redis_dsn)
    return RedisStorage(cast("RedisClientProtocol", client), namespace=namespace)
