"""Factories for constructing PromptVault sessions from validated settings.

Updates:
  v0.1.1 - 2026-10-04 - Wire Redis storage backend selection.
  v0.1.0 - 2026-09-27 - Introduce build_prompt_vault factory.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .custom_prompts import CustomPromptStore
from .favorites import FavoritesStore
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage, build_redis_storage
from .vault import PromptVault

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable

    from config import PromptVaultSettings
else:  # pragma: no cover - typing only
    PromptVaultSettings = Any

factory_logger = logging.getLogger("prompt_vault.factory")

__all__ = ["build_prompt_vault", "build_storage"]


def build_storage(settings: PromptVaultSettings) -> KeyValueStorage:
    """Return the key-value storage backend selected by *settings*."""
    backend = settings.storage_backend
    if backend == "memory":
        factory_logger.info("Using in-memory storage; favourites will not survive restarts")
        return MemoryStorage()
    if backend == "redis":
        if not settings.redis_dsn:
            raise ValueError("redis_dsn is required for the redis storage backend")
        return build_redis_storage(settings.redis_dsn)
    return JsonFileStorage(settings.storage_path)


def build_prompt_vault(
    settings: PromptVaultSettings,
    *,
    storage: KeyValueStorage | None = None,
    id_factory: Callable[[], str] | None = None,
    clock: Callable[[], int] | None = None,
) -> PromptVault:
    """Return a :class:`PromptVault` wired to the configured storage backend.

    The catalogue is not fetched here; callers await :meth:`PromptVault.load`
    (or use :func:`core.catalog_loader.load_catalog`) once the session starts.
    """
    resolved_storage = storage if storage is not None else build_storage(settings)
    favorites = FavoritesStore(resolved_storage, key=settings.favorites_key)
    custom_prompts = CustomPromptStore(
        resolved_storage,
        key=settings.custom_prompts_key,
        id_factory=id_factory,
        clock=clock,
    )
    factory_logger.debug(
        "Loaded %d favourite(s) and %d custom prompt(s)",
        len(favorites),
        len(custom_prompts),
    )
    return PromptVault(
        favorites=favorites,
        custom_prompts=custom_prompts,
        catalog_source=settings.catalog_source,
        fetch_timeout=settings.fetch_timeout_seconds,
    )
