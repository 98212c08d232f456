"""Common exception classes for the core package.

All exceptions inherit from :class:`PromptVaultError`, allowing callers to
catch a single base class for any vault-related failure while still
distinguishing individual error categories when needed.

None of these errors are fatal to a session: catalogue and storage failures
are caught at the loader/store boundary and degrade to empty collections or
failed persistence results. Only clipboard failures reach the user.

Updates:
  v0.2.1 - 2026-10-18 - Add corrupt storage and id exhaustion errors.
  v0.2.0 - 2026-10-02 - Add clipboard and prompt lookup errors.
  v0.1.0 - 2026-09-21 - Created module with catalogue and storage hierarchy.
"""

from __future__ import annotations


class PromptVaultError(Exception):
    """Base exception for Prompt Vault failures."""


class PromptNotFoundError(PromptVaultError):
    """Raised when a prompt id matches neither the catalogue nor custom prompts."""


class PromptIdExhaustedError(PromptVaultError):
    """Raised when no unused custom prompt id could be generated."""


# ---------------------------------------------------------------------------
# Catalogue errors
# ---------------------------------------------------------------------------


class CatalogError(PromptVaultError):
    """Base class for prompt catalogue failures."""


class CatalogFormatError(CatalogError, ValueError):
    """Raised when a catalogue payload does not match the tab/section/category shape."""


class CatalogLoadError(CatalogError):
    """Raised when the catalogue source cannot be read or fetched."""


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------


class StorageError(PromptVaultError):
    """Raised when the key-value storage backend cannot be read or written."""


class StorageCorruptError(StorageError):
    """Raised when stored data exists but cannot be decoded."""


# ---------------------------------------------------------------------------
# Clipboard boundary
# ---------------------------------------------------------------------------


class ClipboardError(PromptVaultError):
    """Raised when text cannot be written to the system clipboard."""
