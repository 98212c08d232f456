"""Configuration helpers for Prompt Vault.

Updates: v0.1.1 - 2026-10-04 - Expose storage backend defaults.
Updates: v0.1.0 - 2026-09-26 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_COPY_FEEDBACK_SECONDS,
    DEFAULT_CUSTOM_PROMPTS_KEY,
    DEFAULT_FAVORITES_KEY,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_STORAGE_PATH,
    STORAGE_BACKENDS,
    PromptVaultSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_COPY_FEEDBACK_SECONDS",
    "DEFAULT_CUSTOM_PROMPTS_KEY",
    "DEFAULT_FAVORITES_KEY",
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "DEFAULT_STORAGE_PATH",
    "STORAGE_BACKENDS",
    "PromptVaultSettings",
    "SettingsError",
    "load_settings",
]
