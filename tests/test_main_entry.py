"""Lightweight integration checks for the main module.

Updates:
  v0.1.3 - 2026-10-18 - Cover custom prompt id exhaustion.
  v0.1.2 - 2026-10-07 - Cover clipboard failure exit code.
  v0.1.1 - 2026-10-06 - Cover copy command through a fake clipboard writer.
  v0.1.0 - 2026-09-28 - Cover search, favourites, and custom prompt commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

import pytest

import main
from cli import commands
from core.custom_prompts import CustomIdGenerator
from core.exceptions import ClipboardError
from core.identity import compute_prompt_id


class _FakeWriter:
    def __init__(self) -> None:
        self.texts: list[str] = []

    def set_text(self, text: str) -> None:
        self.texts.append(text)


class _BrokenWriter:
    def set_text(self, text: str) -> None:
        raise ClipboardError("no display")


@pytest.fixture()
def cli_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    catalog_document: list[dict[str, Any]],
) -> Path:
    """Point the CLI at a temporary catalogue and storage file."""
    catalogue = tmp_path / "catalogue.json"
    catalogue.write_text(json.dumps(catalog_document), encoding="utf-8")
    storage = tmp_path / "vault.json"
    for var in ("PROMPT_VAULT_CONFIG_JSON", "PROMPT_VAULT_ENV_FILE", "PROMPT_VAULT_REDIS_DSN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PROMPT_VAULT_CATALOG_SOURCE", str(catalogue))
    monkeypatch.setenv("PROMPT_VAULT_STORAGE_BACKEND", "file")
    monkeypatch.setenv("PROMPT_VAULT_STORAGE_PATH", str(storage))
    return storage


def _patch_writer(monkeypatch: pytest.MonkeyPatch, writer: object) -> None:
    monkeypatch.setattr(cast(Any, commands), "_clipboard_writer", lambda: writer)


def test_no_command_prints_help(cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print usage and exit cleanly when no subcommand is given."""
    assert main.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_print_settings_summary(cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Render the resolved configuration."""
    assert main.main(["--print-settings"]) == 0
    out = capsys.readouterr().out
    assert "Storage backend: file" in out
    assert "catalogue.json" in out


def test_settings_error_returns_exit_code_two(
    cli_env: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Exit with status 2 when configuration is invalid."""
    monkeypatch.setenv("PROMPT_VAULT_FETCH_TIMEOUT_SECONDS", "-1")
    assert main.main(["tabs"]) == 2


def test_search_lists_matching_prompts(cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print prompts whose fields contain the query."""
    assert main.main(["search", "THANKS"]) == 0
    out = capsys.readouterr().out
    assert "Say Thanks" in out
    assert "Plan a weekly menu" not in out
    assert "1 prompt(s) matched" in out


def test_search_with_failed_catalogue_shows_nothing(
    cli_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A failed load degrades to an empty catalogue instead of an error."""
    monkeypatch.setenv("PROMPT_VAULT_CATALOG_SOURCE", str(tmp_path / "missing.json"))
    assert main.main(["search"]) == 0
    assert "0 prompt(s) matched" in capsys.readouterr().out


def test_tabs_lists_counts(cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """List tabs with the number of prompts below each."""
    assert main.main(["tabs"]) == 0
    out = capsys.readouterr().out
    assert "Work (3 prompt(s))" in out
    assert "Home (1 prompt(s))" in out


def test_favourite_toggle_persists_between_runs(
    cli_env: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Toggle a favourite and see it listed on the next invocation."""
    prompt_id = compute_prompt_id("Work", "Email", "Reply", "Say Thanks")

    assert main.main(["favorites", "toggle", prompt_id]) == 0
    assert f"{prompt_id} added to favourites" in capsys.readouterr().out

    assert main.main(["favorites"]) == 0
    assert "Say Thanks" in capsys.readouterr().out

    stored = json.loads(cli_env.read_text(encoding="utf-8"))
    assert json.loads(stored["pv_favorites"]) == {prompt_id: True}


def test_custom_add_list_and_remove(cli_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Manage custom prompts across separate invocations."""
    assert main.main(["custom", "add", "Write a haiku", "--tab", "Fun"]) == 0
    added = capsys.readouterr().out.strip()
    prompt_id = added.rsplit(" ", 1)[-1]
    assert prompt_id.startswith("c")

    assert main.main(["custom", "list"]) == 0
    assert "Write a haiku" in capsys.readouterr().out

    assert main.main(["show", prompt_id]) == 0
    assert "Write a haiku" in capsys.readouterr().out

    assert main.main(["custom", "remove", prompt_id]) == 0
    assert f"Removed custom prompt {prompt_id}" in capsys.readouterr().out

    assert main.main(["custom", "remove", prompt_id]) == 0
    assert "No custom prompt" in capsys.readouterr().out


def test_custom_add_rejects_blank_text(cli_env: Path) -> None:
    """Refuse to store an empty custom prompt."""
    assert main.main(["custom", "add", "   "]) == commands.EXIT_USAGE


def test_custom_add_reports_id_exhaustion(
    cli_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit with a usage error when every generated id is already taken."""
    monkeypatch.setattr(CustomIdGenerator, "__call__", lambda self: "ctaken")
    assert main.main(["custom", "add", "first"]) == 0
    capsys.readouterr()

    assert main.main(["custom", "add", "second"]) == commands.EXIT_USAGE
    assert "No unused custom prompt id" in capsys.readouterr().out


def test_show_unknown_id_returns_not_found(cli_env: Path) -> None:
    """Exit with status 4 when the id is unknown."""
    assert main.main(["show", "pmissing"]) == commands.EXIT_NOT_FOUND


def test_copy_writes_prompt_text(
    cli_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Copy a catalogue prompt through the clipboard writer."""
    writer = _FakeWriter()
    _patch_writer(monkeypatch, writer)
    prompt_id = compute_prompt_id("Home", "Cooking", "Dinner", "Plan a weekly menu")

    assert main.main(["copy", prompt_id, "--feedback-seconds", "0"]) == 0
    assert writer.texts == ["Plan a weekly menu"]
    assert f"Copied {prompt_id}" in capsys.readouterr().out


def test_copy_failure_alerts_user(
    cli_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit with status 5 and print the alert when the clipboard rejects the write."""
    _patch_writer(monkeypatch, _BrokenWriter())
    prompt_id = compute_prompt_id("Work", "Email", "Reply", "Say Thanks")

    assert main.main(["copy", prompt_id]) == commands.EXIT_COPY_FAILED
    assert "Could not copy" in capsys.readouterr().err
