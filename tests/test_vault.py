"""Tests for the PromptVault session facade.

Updates:
  v0.1.1 - 2026-10-06 - Cover id lookup across catalogue and custom prompts.
  v0.1.0 - 2026-09-27 - Cover catalogue lifecycle and favourite ordering.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
import pytest

from config import PromptVaultSettings
from core.catalog_loader import CatalogLoadResult, CatalogState
from core.custom_prompts import CustomPromptStore
from core.exceptions import CatalogLoadError, PromptNotFoundError
from core.factory import build_prompt_vault, build_storage
from core.favorites import FavoritesStore
from core.identity import compute_prompt_id
from core.storage import JsonFileStorage, MemoryStorage
from core.vault import FAVORITES_TAB, PromptVault


def _vault(storage: MemoryStorage) -> PromptVault:
    return PromptVault(
        favorites=FavoritesStore(storage),
        custom_prompts=CustomPromptStore(storage, id_factory=lambda: "cfixed", clock=lambda: 1),
    )


def test_pending_vault_exposes_empty_views(memory_storage: MemoryStorage) -> None:
    """Before a catalogue arrives every derived view is empty."""
    vault = _vault(memory_storage)

    assert vault.catalog_state is CatalogState.PENDING
    assert vault.prompts == ()
    assert vault.tabs() == []
    assert vault.search("") == []
    assert vault.favorite_prompts() == []


def test_set_catalog_indexes_prompts(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """Installing a document flattens it and marks the catalogue ready."""
    vault = _vault(memory_storage)
    vault.set_catalog(catalog_document)

    assert vault.catalog_state is CatalogState.READY
    assert vault.tabs() == ["Work", "Home"]
    assert len(vault.prompts) == 4
    assert [p.text for p in vault.search("invoice")] == ["Nudge about the invoice"]
    assert vault.default_tab() == FAVORITES_TAB
    home = vault.find_tab("Home")
    assert home is not None and home.prompt_count() == 1
    assert vault.find_tab("Missing") is None


def test_replacing_catalog_replaces_prompts(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """A new document replaces the flat collection wholesale."""
    vault = _vault(memory_storage)
    vault.set_catalog(catalog_document)
    vault.set_catalog(catalog_document[1:])

    assert [p.tab for p in vault.prompts] == ["Home"]


def test_failed_load_leaves_views_empty(memory_storage: MemoryStorage) -> None:
    """A failed load records the error and keeps the catalogue empty."""
    vault = _vault(memory_storage)
    error = CatalogLoadError("offline")
    vault.apply_load_result(CatalogLoadResult.failed("https://example.com", error))

    assert vault.catalog_state is CatalogState.FAILED
    assert vault.last_error is error
    assert vault.prompts == ()


def test_favorite_prompts_follow_catalogue_order(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """List favourites in document order regardless of toggle order."""
    vault = _vault(memory_storage)
    vault.set_catalog(catalog_document)
    last, first = vault.prompts[3], vault.prompts[0]

    vault.toggle_favorite(last.id)
    vault.toggle_favorite(first.id)

    assert vault.favorite_prompts() == [first, last]


def test_favorites_for_unknown_ids_are_kept_but_hidden(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """Favourites pointing at vanished prompts stay stored but are not listed."""
    vault = _vault(memory_storage)
    vault.set_catalog(catalog_document)
    vault.toggle_favorite("pgone")

    assert vault.favorites.is_favorite("pgone")
    assert vault.favorite_prompts() == []


def test_find_prompt_resolves_catalogue_and_custom_ids(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """Look up catalogue prompts first and custom prompts second."""
    vault = _vault(memory_storage)
    vault.set_catalog(catalog_document)
    custom = vault.custom_prompts.add(tab="Mine", section="", category="", text="hi")

    catalogue_id = compute_prompt_id("Home", "Cooking", "Dinner", "Plan a weekly menu")
    assert vault.find_prompt(catalogue_id).text == "Plan a weekly menu"
    assert vault.find_prompt("cfixed") == custom
    with pytest.raises(PromptNotFoundError):
        vault.find_prompt("pnothing")


@pytest.mark.asyncio()
async def test_load_installs_remote_catalogue(
    memory_storage: MemoryStorage,
    catalog_document: list[dict[str, Any]],
) -> None:
    """Await the one-shot fetch and install the parsed catalogue."""

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=catalog_document)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    vault = _vault(memory_storage)

    result = await vault.load("https://example.com/prompts.json", client=client)
    await client.aclose()

    assert result.ok
    assert vault.catalog_state is CatalogState.READY
    assert len(vault.prompts) == 4


def test_build_prompt_vault_shares_storage_between_stores(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Wire both stores to one file backend using the configured keys."""
    monkeypatch.chdir(tmp_path)
    settings = PromptVaultSettings(storage_path=tmp_path / "vault.json")

    storage = build_storage(settings)
    assert isinstance(storage, JsonFileStorage)

    vault = build_prompt_vault(settings, id_factory=lambda: "c1", clock=lambda: 5)
    vault.custom_prompts.add(tab="", section="", category="", text="x")
    vault.toggle_favorite("p1")

    reopened = build_prompt_vault(settings)
    assert reopened.favorites.ids() == ["p1"]
    assert [record.id for record in reopened.custom_prompts] == ["c1"]


def test_build_storage_selects_memory_backend(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Return process-local storage for the memory backend."""
    monkeypatch.chdir(tmp_path)
    settings = PromptVaultSettings(storage_backend="memory")
    assert isinstance(build_storage(settings), MemoryStorage)
