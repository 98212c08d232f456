"""CLI command handlers for Prompt Vault.

Updates:
  v0.1.3 - 2026-10-18 - Report custom prompt id exhaustion instead of crashing.
  v0.1.2 - 2026-10-07 - Return exit code 5 when clipboard writes fail.
  v0.1.1 - 2026-10-06 - Add copy command backed by the clipboard boundary.
  v0.1.0 - 2026-09-28 - Add search, tabs, show, favourites, and custom prompt handlers.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.clipboard import (
    DEFAULT_COPY_FEEDBACK_SECONDS,
    ClipboardWriter,
    CopyFeedback,
    QtClipboardWriter,
)
from core.exceptions import PromptIdExhaustedError, PromptNotFoundError

from .utils import format_prompt_line, print_and_log, prompt_path

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.vault import PromptVault
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptVault = Any

CommandHandler = Callable[[PromptVault, argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_NOT_FOUND = 4
EXIT_COPY_FAILED = 5


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_catalog: bool = True


def _clipboard_writer() -> ClipboardWriter:
    return QtClipboardWriter()


def _alert(message: str) -> None:
    print(message, file=sys.stderr)


def _feedback_seconds(args: argparse.Namespace) -> float:
    value = getattr(args, "feedback_seconds", None)
    return DEFAULT_COPY_FEEDBACK_SECONDS if value is None else max(0.0, float(value))


def run_search(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    query = getattr(args, "query", "") or ""
    results = vault.search(query)
    limit = getattr(args, "limit", None)
    shown = results if limit is None or limit < 0 else results[:limit]
    for prompt in shown:
        marker = "*" if vault.favorites.is_favorite(prompt.id) else " "
        print(format_prompt_line(prompt, marker=marker))
    logger.debug("Search %r matched %d prompt(s)", query, len(results))
    if len(shown) < len(results):
        print(f"... {len(results) - len(shown)} more")
    print(f"{len(results)} prompt(s) matched")
    return EXIT_OK


def run_tabs(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    names = vault.tabs()
    if not names:
        print("No catalogue tabs available.")
        return EXIT_OK
    for name in names:
        tab = vault.find_tab(name)
        count = tab.prompt_count() if tab is not None else 0
        print(f"{name} ({count} prompt(s))")
    return EXIT_OK


def run_show(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        prompt = vault.find_prompt(args.prompt_id)
    except PromptNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    print(f"{prompt.id}  {prompt_path(prompt)}")
    print()
    print(prompt.text)
    return EXIT_OK


def run_favorites(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    action = getattr(args, "favorites_command", None) or "list"
    if action == "toggle":
        prompt_id = args.prompt_id
        if not any(prompt.id == prompt_id for prompt in vault.prompts):
            logger.warning("Toggling favourite for id %s not present in the catalogue", prompt_id)
        added = vault.toggle_favorite(prompt_id)
        state = "added to" if added else "removed from"
        print(f"{prompt_id} {state} favourites")
        persisted = vault.favorites.last_persist
        if persisted is not None and not persisted.ok:
            logger.warning("Favourites were updated for this session only: %s", persisted.error)
        return EXIT_OK

    favourites = vault.favorite_prompts()
    if not favourites:
        print("You have no favourites yet. Use 'favorites toggle ID' to save one.")
        return EXIT_OK
    for prompt in favourites:
        print(format_prompt_line(prompt, marker="*"))
    return EXIT_OK


def run_custom(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    action = getattr(args, "custom_command", None) or "list"
    store = vault.custom_prompts
    if action == "add":
        text = (args.text or "").strip()
        if not text:
            print_and_log(logger, logging.ERROR, "Prompt text must not be empty.")
            return EXIT_USAGE
        try:
            record = store.add(
                tab=args.tab.strip(),
                section=args.section.strip(),
                category=args.category.strip(),
                text=text,
            )
        except PromptIdExhaustedError as exc:
            print_and_log(logger, logging.ERROR, str(exc))
            return EXIT_USAGE
        print(f"Added custom prompt {record.id}")
        return EXIT_OK
    if action == "remove":
        if store.remove(args.prompt_id):
            print(f"Removed custom prompt {args.prompt_id}")
        else:
            print(f"No custom prompt with id {args.prompt_id}")
        return EXIT_OK

    records = store.records()
    if not records:
        print("No custom prompts yet. Use 'custom add TEXT' to create one.")
        return EXIT_OK
    for record in records:
        print(format_prompt_line(record))
    return EXIT_OK


def run_copy(vault: PromptVault, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        prompt = vault.find_prompt(args.prompt_id)
    except PromptNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    feedback = CopyFeedback(
        _clipboard_writer(),
        alert=_alert,
        reset_after=_feedback_seconds(args),
    )
    copied = asyncio.run(feedback.copy(prompt.text))
    if not copied:
        return EXIT_COPY_FAILED
    print(f"Copied {prompt.id} to the clipboard")
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "search": CommandSpec(run_search),
    "tabs": CommandSpec(run_tabs),
    "show": CommandSpec(run_show),
    "favorites": CommandSpec(run_favorites),
    "custom": CommandSpec(run_custom, requires_catalog=False),
    "copy": CommandSpec(run_copy),
}


__all__ = ["COMMAND_SPECS", "CommandSpec"]
