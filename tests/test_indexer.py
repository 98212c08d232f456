"""Tests for catalogue parsing and flattening.

Updates:
  v0.1.0 - 2026-09-22 - Cover document order, id derivation, and schema errors.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from core.exceptions import CatalogFormatError
from core.identity import compute_prompt_id
from core.indexer import flatten_catalog, parse_catalog
from models.catalog_model import CatalogTab, FlatPrompt


def _single_prompt_tab(name: str) -> dict[str, Any]:
    return {
        "tab": name,
        "sections": [
            {"section": "S", "categories": [{"category": "C", "prompts": [f"{name} prompt"]}]}
        ],
    }


def test_flatten_catalog_preserves_tab_order() -> None:
    """Emit tab A's prompt before tab B's prompt."""
    records = flatten_catalog([_single_prompt_tab("A"), _single_prompt_tab("B")])

    assert [record.text for record in records] == ["A prompt", "B prompt"]
    assert [record.tab for record in records] == ["A", "B"]


def test_flatten_catalog_walks_nested_levels_in_document_order(
    catalog_document: list[dict[str, Any]],
) -> None:
    """Visit sections, categories, and prompts in the order they appear."""
    records = flatten_catalog(catalog_document)

    assert [(r.tab, r.category, r.text) for r in records] == [
        ("Work", "Reply", "Say Thanks"),
        ("Work", "Reply", "Decline politely"),
        ("Work", "Follow-up", "Nudge about the invoice"),
        ("Home", "Dinner", "Plan a weekly menu"),
    ]


def test_flatten_catalog_derives_ids_from_full_path(
    catalog_document: list[dict[str, Any]],
) -> None:
    """Tag each record with the id computed from tab, section, category, and text."""
    first = flatten_catalog(catalog_document)[0]

    assert first == FlatPrompt(
        id=compute_prompt_id("Work", "Email", "Reply", "Say Thanks"),
        tab="Work",
        section="Email",
        category="Reply",
        text="Say Thanks",
    )
    assert first.id == "pxk4q3n"


def test_flatten_catalog_does_not_mutate_input(catalog_document: list[dict[str, Any]]) -> None:
    """Leave the source document untouched."""
    original = copy.deepcopy(catalog_document)
    flatten_catalog(catalog_document)
    assert catalog_document == original


def test_flatten_catalog_accepts_parsed_tabs(catalog_document: list[dict[str, Any]]) -> None:
    """Produce identical records from raw mappings and parsed models."""
    tabs = parse_catalog(catalog_document)

    assert all(isinstance(tab, CatalogTab) for tab in tabs)
    assert flatten_catalog(tabs) == flatten_catalog(catalog_document)


def test_flatten_catalog_returns_empty_for_empty_document() -> None:
    """An empty catalogue yields no records."""
    assert flatten_catalog([]) == []


def test_flatten_catalog_keeps_duplicate_prompts() -> None:
    """Identical prompts in the same category share an id and are both emitted."""
    document = [
        {
            "tab": "T",
            "sections": [
                {"section": "S", "categories": [{"category": "C", "prompts": ["x", "x"]}]}
            ],
        }
    ]
    records = flatten_catalog(document)

    assert len(records) == 2
    assert records[0].id == records[1].id


@pytest.mark.parametrize(
    "payload",
    [
        {"tab": "not a list"},
        [{"sections": []}],
        [{"tab": "T", "sections": "nope"}],
        [{"tab": "T", "sections": [{"section": "S"}]}],
        [{"tab": "T", "sections": [{"section": "S", "categories": [{"category": "C"}]}]}],
        [
            {
                "tab": "T",
                "sections": [{"section": "S", "categories": [{"category": "C", "prompts": [1]}]}],
            }
        ],
        ["just a string"],
    ],
)
def test_parse_catalog_rejects_malformed_payloads(payload: object) -> None:
    """Raise CatalogFormatError for payloads that do not match the taxonomy shape."""
    with pytest.raises(CatalogFormatError):
        parse_catalog(payload)
