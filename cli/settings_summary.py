"""Printable summaries for Prompt Vault configuration.

Updates:
  v0.1.0 - 2026-09-28 - Render catalogue source and storage settings.
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from config import PromptVaultSettings
from core.catalog_loader import describe_source

from .utils import describe_path


def _mask_dsn(dsn: str | None) -> str:
    """Hide any password embedded in a Redis DSN."""
    if not dsn:
        return "not set"
    parts = urlsplit(dsn)
    if parts.password is None:
        return dsn
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    user = parts.username or ""
    netloc = f"{user}:****@{host}" if user else f":****@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def print_settings_summary(settings: PromptVaultSettings) -> None:
    """Emit a readable summary of the resolved configuration."""
    backend = getattr(settings, "storage_backend", "file")
    lines = [
        "Prompt Vault configuration summary",
        "-----------------------------------",
        f"Catalogue source: {describe_source(getattr(settings, 'catalog_source', None))}",
        f"Fetch timeout: {getattr(settings, 'fetch_timeout_seconds', 0):.1f}s",
        f"Storage backend: {backend}",
    ]
    if backend == "file":
        lines.append(f"Storage file: {describe_path(getattr(settings, 'storage_path', None))}")
    elif backend == "redis":
        lines.append(f"Redis DSN: {_mask_dsn(getattr(settings, 'redis_dsn', None))}")
    else:
        lines.append("Storage: in-memory (not persisted)")
    lines.extend(
        [
            f"Favourites key: {getattr(settings, 'favorites_key', '')}",
            f"Custom prompts key: {getattr(settings, 'custom_prompts_key', '')}",
            f"Copy feedback window: {getattr(settings, 'copy_feedback_seconds', 0):.1f}s",
        ]
    )
    print("\n".join(lines))
