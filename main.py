"""Application entry point for Prompt Vault.

Updates:
  v0.1.2 - 2026-10-07 - Fill the copy feedback window from settings when not given.
  v0.1.1 - 2026-10-05 - Skip the catalogue fetch for commands that do not need it.
  v0.1.0 - 2026-09-28 - Wire settings, vault factory, and CLI commands.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import build_parser
from cli.runtime import configure_http_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import build_prompt_vault, load_catalog

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptVaultSettings
    from core.vault import PromptVault


def _initialise_vault(
    settings: PromptVaultSettings,
    logger: logging.Logger,
) -> PromptVault | None:
    try:
        return build_prompt_vault(settings)
    except Exception as exc:  # pragma: no cover - surfaced to CLI
        logger.error("Failed to initialise storage: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, the vault session, and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.logging_config)
    logger = logging.getLogger("prompt_vault.main")
    configure_http_logging(logger.isEnabledFor(logging.DEBUG))

    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = exc.__cause__
        logger.error("Failed to load settings: %s", cause or exc)
        return 2

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command)
    if spec is None:
        parser.print_help(sys.stdout)
        return 0

    if getattr(args, "feedback_seconds", None) is None and command == "copy":
        args.feedback_seconds = settings.copy_feedback_seconds

    vault = _initialise_vault(settings, logger)
    if vault is None:
        return 3

    if spec.requires_catalog:
        result = load_catalog(settings.catalog_source, timeout=settings.fetch_timeout_seconds)
        vault.apply_load_result(result)
        if not result.ok:
            logger.warning("Continuing without a catalogue: %s", result.error)

    return spec.handler(vault, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
