"""Data models for Prompt Vault.

Updates: v0.2.0 - 2026-09-30 - Export CustomPrompt records.
Updates: v0.1.0 - 2026-09-21 - Export catalogue taxonomy and FlatPrompt dataclasses.
"""

from .catalog_model import CatalogCategory, CatalogSection, CatalogTab, CustomPrompt, FlatPrompt

__all__ = [
    "CatalogCategory",
    "CatalogSection",
    "CatalogTab",
    "CustomPrompt",
    "FlatPrompt",
]
