"""Catalogue taxonomy and prompt record models.

Updates: v0.2.0 - 2026-09-30 - Add CustomPrompt record with epoch-millisecond timestamps.
Updates: v0.1.0 - 2026-09-21 - Introduce taxonomy dataclasses and FlatPrompt records.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _now_millis() -> int:
    """Return the current time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _require_text(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{where} is missing a '{key}' string")
    return value


def _require_list(data: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise ValueError(f"{where} is missing a '{key}' list")
    return value


def _require_mapping(value: object, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where} must be a JSON object")
    return value


@dataclass(frozen=True, slots=True)
class CatalogCategory:
    """Innermost taxonomy level holding the prompt texts."""

    category: str
    prompts: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, data: object) -> CatalogCategory:
        """Hydrate a category from a parsed JSON object."""
        mapping = _require_mapping(data, "Category")
        name = _require_text(mapping, "category", "Category")
        prompts = _require_list(mapping, "prompts", f"Category '{name}'")
        for prompt in prompts:
            if not isinstance(prompt, str):
                raise ValueError(f"Category '{name}' contains a non-string prompt")
        return cls(category=name, prompts=tuple(prompts))

    def to_record(self) -> dict[str, Any]:
        """Serialise the category back into its JSON shape."""
        return {"category": self.category, "prompts": list(self.prompts)}


@dataclass(frozen=True, slots=True)
class CatalogSection:
    """Middle taxonomy level grouping categories."""

    section: str
    categories: tuple[CatalogCategory, ...] = ()

    @classmethod
    def from_record(cls, data: object) -> CatalogSection:
        """Hydrate a section and its categories from a parsed JSON object."""
        mapping = _require_mapping(data, "Section")
        name = _require_text(mapping, "section", "Section")
        categories = _require_list(mapping, "categories", f"Section '{name}'")
        return cls(
            section=name,
            categories=tuple(CatalogCategory.from_record(entry) for entry in categories),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise the section back into its JSON shape."""
        return {
            "section": self.section,
            "categories": [category.to_record() for category in self.categories],
        }


@dataclass(frozen=True, slots=True)
class CatalogTab:
    """Outermost taxonomy level shown as a top-level tab."""

    tab: str
    sections: tuple[CatalogSection, ...] = ()

    @classmethod
    def from_record(cls, data: object) -> CatalogTab:
        """Hydrate a tab and its nested sections from a parsed JSON object."""
        mapping = _require_mapping(data, "Tab")
        name = _require_text(mapping, "tab", "Tab")
        sections = _require_list(mapping, "sections", f"Tab '{name}'")
        return cls(
            tab=name,
            sections=tuple(CatalogSection.from_record(entry) for entry in sections),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise the tab back into its JSON shape."""
        return {"tab": self.tab, "sections": [section.to_record() for section in self.sections]}

    def prompt_count(self) -> int:
        """Return the number of prompts nested below this tab."""
        return sum(len(cat.prompts) for sec in self.sections for cat in sec.categories)


@dataclass(frozen=True, slots=True)
class FlatPrompt:
    """A catalogue prompt paired with its full taxonomy path and derived id."""

    id: str
    tab: str
    section: str
    category: str
    text: str

    def to_record(self) -> dict[str, str]:
        return {
            "id": self.id,
            "tab": self.tab,
            "section": self.section,
            "category": self.category,
            "text": self.text,
        }

    def search_fields(self) -> tuple[str, str, str, str]:
        """Return the fields matched by free-text search."""
        return (self.text, self.category, self.tab, self.section)


@dataclass(slots=True)
class CustomPrompt:
    """User-authored prompt stored outside the read-only catalogue."""

    id: str
    tab: str
    section: str
    category: str
    text: str
    created_at: int = field(default_factory=_now_millis)

    def to_record(self) -> dict[str, Any]:
        """Serialise the prompt using the persisted ``createdAt`` key."""
        return {
            "id": self.id,
            "tab": self.tab,
            "section": self.section,
            "category": self.category,
            "text": self.text,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> CustomPrompt:
        """Hydrate a custom prompt, raising ``ValueError`` on malformed rows."""
        prompt_id = data.get("id")
        if not isinstance(prompt_id, str) or not prompt_id:
            raise ValueError("custom prompt record requires a non-empty 'id'")
        created_at = data.get("createdAt", data.get("created_at"))
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            raise ValueError(f"custom prompt {prompt_id} has no numeric 'createdAt'")
        return cls(
            id=prompt_id,
            tab=str(data.get("tab") or ""),
            section=str(data.get("section") or ""),
            category=str(data.get("category") or ""),
            text=str(data.get("text") or ""),
            created_at=int(created_at),
        )


__all__ = [
    "CatalogCategory",
    "CatalogSection",
    "CatalogTab",
    "CustomPrompt",
    "FlatPrompt",
]
