"""Shared CLI utility functions for Prompt Vault commands.

Updates:
  v0.1.0 - 2026-09-28 - Extract stdout logging, path description, and prompt formatting.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger

    from models.catalog_model import CustomPrompt, FlatPrompt
else:  # pragma: no cover - runtime placeholders for type-only imports
    Logger = CustomPrompt = FlatPrompt = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object) -> str:
    """Return a human-friendly description of a storage file path."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"
    resolved = path.expanduser()
    if resolved.exists():
        if resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    if resolved.parent.exists():
        return f"{resolved} (missing, will be created)"
    return f"{resolved} (missing; parent directory will be created)"


def prompt_path(prompt: FlatPrompt | CustomPrompt) -> str:
    """Return ``tab / section / category`` for display, skipping blank levels."""
    parts = [part for part in (prompt.tab, prompt.section, prompt.category) if part]
    return " / ".join(parts) or "(uncategorised)"


def format_prompt_line(prompt: FlatPrompt | CustomPrompt, *, marker: str = " ") -> str:
    """Return a one-line listing entry with id, path, and shortened text."""
    preview = textwrap.shorten(prompt.text, width=72, placeholder="…")
    return f"{marker} {prompt.id:<10} {prompt_path(prompt)}\n    {preview}"
