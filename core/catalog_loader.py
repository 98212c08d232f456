"""One-shot loading of the prompt catalogue document.

The catalogue is fetched once per session from an HTTP(S) URL, a local JSON
file, or the packaged default. Failures never propagate: callers receive a
:class:`CatalogLoadResult` in the ``FAILED`` state and carry on with an empty
catalogue. There is no retry.

Updates:
  v0.1.3 - 2026-10-18 - Report undecodable catalogue files as format errors.
  v0.1.2 - 2026-10-05 - Fall back to the packaged catalogue when no source is configured.
  v0.1.1 - 2026-09-29 - Attach the failure cause to load results for diagnostics.
  v0.1.0 - 2026-09-26 - Introduce async catalogue fetch with httpx.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from catalog import builtin_catalog_resource

from .exceptions import CatalogError, CatalogFormatError, CatalogLoadError
from .indexer import parse_catalog

if TYPE_CHECKING:
    from models.catalog_model import CatalogTab

logger = logging.getLogger("prompt_vault.catalog")

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0

__all__ = [
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "CatalogLoadResult",
    "CatalogState",
    "describe_source",
    "fetch_catalog",
    "load_catalog",
    "read_catalog_text",
]


class CatalogState(str, Enum):
    """Lifecycle of the session catalogue."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


def _tabs_factory() -> tuple[CatalogTab, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class CatalogLoadResult:
    """Outcome of a catalogue fetch."""

    state: CatalogState
    source: str
    tabs: tuple[CatalogTab, ...] = field(default_factory=_tabs_factory)
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.state is CatalogState.READY

    @classmethod
    def ready(cls, source: str, tabs: tuple[CatalogTab, ...]) -> CatalogLoadResult:
        return cls(state=CatalogState.READY, source=source, tabs=tabs)

    @classmethod
    def failed(cls, source: str, error: CatalogError) -> CatalogLoadResult:
        return cls(state=CatalogState.FAILED, source=source, error=error)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def describe_source(source: str | Path | None) -> str:
    """Return a human-readable label for a catalogue *source*."""
    if source is None or (isinstance(source, str) and not source.strip()):
        return "builtin:prompts.json"
    return str(source)


def read_catalog_text(source: str | Path | None) -> str:
    """Return raw JSON text from a local path or the packaged catalogue."""
    if source is None or (isinstance(source, str) and not source.strip()):
        try:
            return builtin_catalog_resource().read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CatalogFormatError("Packaged prompt catalogue is not valid UTF-8") from exc
        except OSError as exc:
            raise CatalogLoadError("Packaged prompt catalogue is unavailable") from exc
    path = Path(source).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CatalogFormatError(f"Prompt catalogue is not valid UTF-8: {path}") from exc
    except OSError as exc:
        raise CatalogLoadError(f"Cannot read prompt catalogue: {path}") from exc


async def _fetch_remote_text(
    url: str,
    *,
    client: httpx.AsyncClient | None,
    timeout: float,
) -> str:
    owns_client = client is None
    active_client = client or httpx.AsyncClient(timeout=timeout)
    try:
        response = await active_client.get(url)
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise CatalogLoadError(f"Catalogue request failed with status {status}") from exc
    except httpx.HTTPError as exc:
        raise CatalogLoadError(f"Catalogue request failed: {exc}") from exc
    finally:
        if owns_client:
            await active_client.aclose()


def _decode(text: str, label: str) -> tuple[CatalogTab, ...]:
    try:
        payload: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogFormatError(f"Invalid JSON in prompt catalogue {label}") from exc
    return parse_catalog(payload)


async def fetch_catalog(
    source: str | Path | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> CatalogLoadResult:
    """Fetch and parse the catalogue from *source* without raising.

    ``source`` may be an ``http(s)`` URL, a filesystem path, or ``None`` for the
    packaged catalogue. An injected *client* is used as-is and left open.
    """
    label = describe_source(source)
    try:
        if isinstance(source, str) and _is_url(source.strip()):
            text = await _fetch_remote_text(source.strip(), client=client, timeout=timeout)
        else:
            text = read_catalog_text(source)
        tabs = _decode(text, label)
    except CatalogError as exc:
        logger.warning("Prompt catalogue unavailable from %s: %s", label, exc)
        return CatalogLoadResult.failed(label, exc)
    logger.info("Loaded %d catalogue tab(s) from %s", len(tabs), label)
    return CatalogLoadResult.ready(label, tabs)


def load_catalog(
    source: str | Path | None = None,
    *,
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> CatalogLoadResult:
    """Synchronous wrapper around :func:`fetch_catalog` for CLI entry points."""
    return asyncio.run(fetch_catalog(source, timeout=timeout))
