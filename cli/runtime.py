"""Runtime boot helpers for the Prompt Vault CLI.

Updates:
  v0.1.1 - 2026-10-05 - Quieten httpx request logs unless debugging.
  v0.1.0 - 2026-09-28 - Extract logging configuration helpers.
"""

from __future__ import annotations

import configparser
import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONF = Path("config") / "logging.conf"
_FALLBACK_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None) -> None:
    """Apply an INI logging config, falling back to ``basicConfig`` at INFO."""
    path = logging_conf_path or DEFAULT_LOGGING_CONF
    problem: Exception | None = None
    if path.is_file():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
        except (OSError, KeyError, ValueError, RuntimeError, configparser.Error) as exc:
            problem = exc
        else:
            return
    logging.basicConfig(level=logging.INFO, format=_FALLBACK_FORMAT)
    if problem is not None:
        logging.getLogger("prompt_vault.runtime").warning(
            "Ignoring unusable logging config %s: %s", path, problem
        )


def configure_http_logging(debug: bool) -> None:
    """Show or hide per-request logs emitted by httpx and httpcore."""
    level = logging.DEBUG if debug else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)
