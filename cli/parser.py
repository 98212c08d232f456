"""Argument parser for the Prompt Vault CLI.

Updates:
  v0.1.1 - 2026-10-06 - Add copy command with optional feedback window override.
  v0.1.0 - 2026-09-28 - Add search, favourites, and custom prompt subcommands.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser for the launcher."""
    parser = argparse.ArgumentParser(description="Prompt Vault launcher")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    search_parser = subparsers.add_parser(
        "search",
        help="List catalogue prompts whose text, category, tab, or section contains QUERY.",
    )
    search_parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Case-insensitive substring; omit to list every prompt.",
    )
    search_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of prompts to display (default: all).",
    )

    subparsers.add_parser("tabs", help="List catalogue tabs with prompt counts.")

    show_parser = subparsers.add_parser("show", help="Print a prompt by id.")
    show_parser.add_argument("prompt_id", help="Catalogue (p...) or custom (c...) prompt id.")

    favorites_parser = subparsers.add_parser("favorites", help="List or toggle favourite prompts.")
    favorites_sub = favorites_parser.add_subparsers(dest="favorites_command")
    favorites_sub.add_parser("list", help="List favourite catalogue prompts.")
    toggle_parser = favorites_sub.add_parser("toggle", help="Add or remove a favourite.")
    toggle_parser.add_argument("prompt_id", help="Catalogue prompt id.")

    custom_parser = subparsers.add_parser("custom", help="Manage your own prompts.")
    custom_sub = custom_parser.add_subparsers(dest="custom_command")
    custom_sub.add_parser("list", help="List custom prompts, oldest first.")
    add_parser = custom_sub.add_parser("add", help="Add a custom prompt.")
    add_parser.add_argument("text", help="Prompt text.")
    add_parser.add_argument("--tab", default="", help="Tab label.")
    add_parser.add_argument("--section", default="", help="Section label.")
    add_parser.add_argument("--category", default="", help="Category label.")
    remove_parser = custom_sub.add_parser("remove", help="Delete a custom prompt.")
    remove_parser.add_argument("prompt_id", help="Custom prompt id.")

    copy_parser = subparsers.add_parser("copy", help="Copy a prompt's text to the clipboard.")
    copy_parser.add_argument("prompt_id", help="Catalogue or custom prompt id.")
    copy_parser.add_argument(
        "--feedback-seconds",
        type=float,
        default=None,
        help="How long the copied indicator stays set (default: from settings).",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Vault launcher."""
    return build_parser().parse_args(argv)
