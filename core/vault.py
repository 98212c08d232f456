"""Session facade tying the catalogue, search, and persisted stores together.

Updates:
  v0.2.0 - 2026-10-06 - Resolve ids across catalogue and custom prompts.
  v0.1.1 - 2026-10-01 - Expose favourite prompts in catalogue order.
  v0.1.0 - 2026-09-27 - Introduce PromptVault session object.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .catalog_loader import CatalogLoadResult, CatalogState, fetch_catalog
from .exceptions import CatalogError, PromptNotFoundError
from .indexer import coerce_catalog, flatten_catalog
from .search import filter_prompts

if TYPE_CHECKING:
    from pathlib import Path

    import httpx

    from models.catalog_model import CatalogTab, CustomPrompt, FlatPrompt

    from .custom_prompts import CustomPromptStore
    from .favorites import FavoritesStore
    from .indexer import CatalogDocument

logger = logging.getLogger("prompt_vault.vault")

FAVORITES_TAB = "Favorites"

__all__ = ["FAVORITES_TAB", "PromptVault"]


class PromptVault:
    """Own the session catalogue and expose search plus store access.

    The flat prompt collection is derived from the catalogue document and
    replaced wholesale whenever a new document is installed. Until a document
    arrives the vault is ``PENDING`` and every derived view is empty.
    """

    def __init__(
        self,
        *,
        favorites: FavoritesStore,
        custom_prompts: CustomPromptStore,
        catalog_source: str | Path | None = None,
        fetch_timeout: float = 10.0,
    ) -> None:
        self.favorites = favorites
        self.custom_prompts = custom_prompts
        self._catalog_source = catalog_source
        self._fetch_timeout = fetch_timeout
        self._state = CatalogState.PENDING
        self._tabs: tuple[CatalogTab, ...] = ()
        self._prompts: tuple[FlatPrompt, ...] = ()
        self._last_error: CatalogError | None = None

    @property
    def catalog_state(self) -> CatalogState:
        return self._state

    @property
    def last_error(self) -> CatalogError | None:
        return self._last_error

    @property
    def prompts(self) -> tuple[FlatPrompt, ...]:
        """Return every catalogue prompt in document order."""
        return self._prompts

    def set_catalog(self, document: CatalogDocument) -> None:
        """Install *document* and rebuild the flat prompt collection."""
        tabs = coerce_catalog(document)
        self._tabs = tabs
        self._prompts = tuple(flatten_catalog(tabs))
        self._state = CatalogState.READY
        self._last_error = None
        logger.debug("Indexed %d prompt(s) across %d tab(s)", len(self._prompts), len(tabs))

    def mark_failed(self, error: CatalogError | None = None) -> None:
        """Record a failed catalogue load; derived views stay empty."""
        self._tabs = ()
        self._prompts = ()
        self._state = CatalogState.FAILED
        self._last_error = error

    def apply_load_result(self, result: CatalogLoadResult) -> None:
        """Install the tabs from *result* or mark the catalogue as failed."""
        if result.ok:
            self.set_catalog(result.tabs)
        else:
            self.mark_failed(result.error)

    async def load(
        self,
        source: str | Path | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> CatalogLoadResult:
        """Fetch the catalogue once and install it; never raises."""
        result = await fetch_catalog(
            source if source is not None else self._catalog_source,
            client=client,
            timeout=self._fetch_timeout,
        )
        self.apply_load_result(result)
        return result

    def tabs(self) -> list[str]:
        """Return tab names in document order."""
        return [tab.tab for tab in self._tabs]

    def find_tab(self, name: str) -> CatalogTab | None:
        """Return the first tab called *name*, if any."""
        for tab in self._tabs:
            if tab.tab == name:
                return tab
        return None

    def default_tab(self) -> str:
        """Return the tab selected when the catalogue first becomes available."""
        return FAVORITES_TAB

    def search(self, query: str | None) -> list[FlatPrompt]:
        """Filter the catalogue prompts by *query*."""
        return filter_prompts(self._prompts, query)

    def favorite_prompts(self) -> list[FlatPrompt]:
        """Return favourited catalogue prompts in catalogue order."""
        return [prompt for prompt in self._prompts if self.favorites.is_favorite(prompt.id)]

    def toggle_favorite(self, prompt_id: str) -> bool:
        """Toggle *prompt_id* in the favourites store and return the new state."""
        return self.favorites.toggle(prompt_id)

    def find_prompt(self, prompt_id: str) -> FlatPrompt | CustomPrompt:
        """Return the catalogue or custom prompt with *prompt_id*.

        Raises:
            PromptNotFoundError: if neither source contains the id.
        """
        for prompt in self._prompts:
            if prompt.id == prompt_id:
                return prompt
        custom = self.custom_prompts.get(prompt_id)
        if custom is not None:
            return custom
        raise PromptNotFoundError(f"Prompt not found: {prompt_id}")
