"""Flatten the nested prompt catalogue into searchable records.

Updates:
  v0.1.1 - 2026-09-30 - Accept raw JSON mappings alongside parsed catalogue tabs.
  v0.1.0 - 2026-09-21 - Introduce catalogue parsing and flattening helpers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from models.catalog_model import CatalogTab, FlatPrompt

from .exceptions import CatalogFormatError
from .identity import compute_prompt_id

CatalogDocument = Iterable[CatalogTab | Mapping[str, Any]]

__all__ = ["CatalogDocument", "coerce_catalog", "flatten_catalog", "parse_catalog"]


def parse_catalog(payload: object) -> tuple[CatalogTab, ...]:
    """Return catalogue tabs parsed from a decoded JSON *payload*.

    Raises:
        CatalogFormatError: if the payload is not a list of tab objects with
            nested ``sections``, ``categories`` and ``prompts`` lists.
    """
    if not isinstance(payload, list):
        raise CatalogFormatError("Prompt catalogue must be a JSON array of tabs")
    return coerce_catalog(payload)


def coerce_catalog(document: CatalogDocument) -> tuple[CatalogTab, ...]:
    """Return *document* as catalogue tabs, parsing raw JSON mappings as needed."""
    tabs: list[CatalogTab] = []
    for entry in document:
        if isinstance(entry, CatalogTab):
            tabs.append(entry)
            continue
        try:
            tabs.append(CatalogTab.from_record(entry))
        except ValueError as exc:
            raise CatalogFormatError(str(exc)) from exc
    return tuple(tabs)


def flatten_catalog(document: CatalogDocument) -> list[FlatPrompt]:
    """Return one :class:`FlatPrompt` per catalogue prompt in document order.

    Tabs, sections, categories and prompts are visited in the order they appear
    so rendering stays deterministic. The input document is never modified.
    """
    records: list[FlatPrompt] = []
    for tab in coerce_catalog(document):
        for section in tab.sections:
            for category in section.categories:
                for text in category.prompts:
                    records.append(
                        FlatPrompt(
                            id=compute_prompt_id(tab.tab, section.section, category.category, text),
                            tab=tab.tab,
                            section=section.section,
                            category=category.category,
                            text=text,
                        )
                    )
    return records
