"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-09-28 - Provide shared catalogue and storage fixtures.
  v0.1.0 - 2026-09-26 - Force Qt offscreen platform for headless clipboard tests.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

from core.storage import MemoryStorage


def pytest_configure(config: Any) -> None:
    """Ensure Qt uses the offscreen platform during tests to avoid GUI aborts."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def catalog_document() -> list[dict[str, Any]]:
    """Return a small two-tab catalogue in its raw JSON shape."""
    return [
        {
            "tab": "Work",
            "sections": [
                {
                    "section": "Email",
                    "categories": [
                        {"category": "Reply", "prompts": ["Say Thanks", "Decline politely"]},
                        {"category": "Follow-up", "prompts": ["Nudge about the invoice"]},
                    ],
                }
            ],
        },
        {
            "tab": "Home",
            "sections": [
                {
                    "section": "Cooking",
                    "categories": [{"category": "Dinner", "prompts": ["Plan a weekly menu"]}],
                }
            ],
        },
    ]


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    """Return an empty in-memory key-value storage."""
    return MemoryStorage()
