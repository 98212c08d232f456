"""Core service layer for Prompt Vault.

Updates:
  v0.2.0 - 2026-10-06 - Export clipboard boundary and session factory.
  v0.1.0 - 2026-09-27 - Surface identity, indexing, search, and store APIs.
"""

from models.catalog_model import CatalogTab, CustomPrompt, FlatPrompt

from .catalog_loader import CatalogLoadResult, CatalogState, fetch_catalog, load_catalog
from .clipboard import ClipboardWriter, CopyFeedback, QtClipboardWriter
from .custom_prompts import CustomIdGenerator, CustomPromptStore
from .events import StoreChange, StoreEvent, StoreSubscription
from .exceptions import (
    CatalogError,
    CatalogFormatError,
    CatalogLoadError,
    ClipboardError,
    PromptIdExhaustedError,
    PromptNotFoundError,
    PromptVaultError,
    StorageCorruptError,
    StorageError,
)
from .factory import build_prompt_vault, build_storage
from .favorites import FavoritesStore
from .identity import compute_prompt_id
from .indexer import flatten_catalog, parse_catalog
from .persistence import PersistResult, PersistStatus
from .search import filter_prompts, is_search_active
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage, RedisStorage
from .vault import FAVORITES_TAB, PromptVault

__all__ = [
    "FAVORITES_TAB",
    "CatalogError",
    "CatalogFormatError",
    "CatalogLoadError",
    "CatalogLoadResult",
    "CatalogState",
    "CatalogTab",
    "ClipboardError",
    "ClipboardWriter",
    "CopyFeedback",
    "CustomIdGenerator",
    "CustomPrompt",
    "CustomPromptStore",
    "FavoritesStore",
    "FlatPrompt",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "PersistResult",
    "PersistStatus",
    "PromptIdExhaustedError",
    "PromptNotFoundError",
    "PromptVault",
    "PromptVaultError",
    "QtClipboardWriter",
    "RedisStorage",
    "StorageCorruptError",
    "StorageError",
    "StoreChange",
    "StoreEvent",
    "StoreSubscription",
    "build_prompt_vault",
    "build_storage",
    "compute_prompt_id",
    "fetch_catalog",
    "filter_prompts",
    "flatten_catalog",
    "is_search_active",
    "load_catalog",
    "parse_catalog",
]
