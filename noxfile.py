"""noxfile.py - Nox sessions for Prompt Vault.

Updates:
  v0.1.1 - 2026-10-07 - Gate coverage on the vault packages and the CLI.
  v0.1.0 - 2026-09-28 - Add format/lint/typecheck/test sessions run from `.venv`.

Install the project with `pip install -e .[dev]` inside `.venv` before running
these sessions. Each session runs against the host interpreter and invokes the
tool binaries installed in `.venv`:

- format: ruff format
- lint: ruff check
- typecheck: pyright
- test: pytest with coverage
- all: the full quality gate
"""

from __future__ import annotations

import sys
from pathlib import Path

import nox

CODE_LOCATIONS: tuple[str, ...] = (
    "main.py",
    "catalog",
    "cli",
    "config",
    "core",
    "models",
    "tests",
)
COVERAGE_TARGETS: tuple[str, ...] = ("core", "models", "cli", "config")
COVERAGE_THRESHOLD = 85


def _venv_tool(session: nox.Session, command: str) -> str:
    """Return the `.venv` path for *command*, failing the session when missing."""
    bin_dir = Path(".venv") / ("Scripts" if sys.platform == "win32" else "bin")
    candidate = bin_dir / (f"{command}.exe" if sys.platform == "win32" else command)
    if not candidate.exists():
        session.error(
            f"Missing {candidate}. Run `python -m venv .venv && pip install -e .[dev]` first."
        )
    return str(candidate)


def _pytest_args() -> list[str]:
    args = ["-n", "auto", "--cov-report=term-missing", f"--cov-fail-under={COVERAGE_THRESHOLD}"]
    args.extend(f"--cov={target}" for target in COVERAGE_TARGETS)
    args.append("tests")
    return args


@nox.session(venv_backend="none")
def format(session: nox.Session) -> None:
    """Format code using ruff."""
    session.run(_venv_tool(session, "ruff"), "format", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def lint(session: nox.Session) -> None:
    """Lint code using ruff."""
    session.run(_venv_tool(session, "ruff"), "check", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def typecheck(session: nox.Session) -> None:
    """Run pyright using the settings in pyproject.toml."""
    session.run(_venv_tool(session, "pyright"), external=True)


@nox.session(venv_backend="none")
def test(session: nox.Session) -> None:
    """Run pytest in parallel with coverage."""
    session.run(_venv_tool(session, "pytest"), *_pytest_args(), external=True)


@nox.session(venv_backend="none")
def all(session: nox.Session) -> None:
    """Run the full Ruff/Pyright/Pytest quality gate."""
    ruff = _venv_tool(session, "ruff")
    session.run(ruff, "check", *CODE_LOCATIONS, external=True)
    session.run(ruff, "format", "--check", *CODE_LOCATIONS, external=True)
    session.run(_venv_tool(session, "pyright"), external=True)
    session.run(_venv_tool(session, "pytest"), *_pytest_args(), external=True)
