"""Free-text filtering over flattened catalogue prompts.

Updates:
  v0.1.0 - 2026-09-22 - Introduce case-insensitive substring filter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.catalog_model import FlatPrompt

__all__ = ["filter_prompts", "is_search_active", "normalise_query"]


def normalise_query(query: str | None) -> str:
    """Return the trimmed, lower-cased form of *query* used for matching."""
    return (query or "").strip().lower()


def is_search_active(query: str | None) -> bool:
    """Return ``True`` when *query* would filter the catalogue."""
    return bool(normalise_query(query))


def filter_prompts(records: Sequence[FlatPrompt], query: str | None) -> list[FlatPrompt]:
    """Return records whose text, category, tab or section contains *query*.

    Matching is plain lower-case substring containment; a record is kept when any
    one field matches. An empty or whitespace-only query returns every record.
    Relative order is always preserved.
    """
    needle = normalise_query(query)
    if not needle:
        return list(records)
    return [
        record
        for record in records
        if any(needle in field.lower() for field in record.search_fields())
    ]
