"""Settings management utilities for Prompt Vault configuration.

Updates:
  v0.2.1 - 2026-10-07 - Validate storage keys and reject identical favourites/custom keys.
  v0.2.0 - 2026-10-04 - Add Redis storage backend selection.
  v0.1.1 - 2026-09-30 - Load .env values without mutating the process environment.
  v0.1.0 - 2026-09-26 - Introduce settings model with JSON and environment sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger("prompt_vault.settings")

ENV_PREFIX = "PROMPT_VAULT_"
CONFIG_JSON_ENV = f"{ENV_PREFIX}CONFIG_JSON"
ENV_FILE_ENV = f"{ENV_PREFIX}ENV_FILE"
DEFAULT_CONFIG_JSON = Path("config") / "config.json"
DEFAULT_ENV_FILE = Path(".env")

DEFAULT_STORAGE_PATH = Path("data") / "prompt_vault.json"
DEFAULT_FAVORITES_KEY = "pv_favorites"
DEFAULT_CUSTOM_PROMPTS_KEY = "pv_custom"
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_COPY_FEEDBACK_SECONDS = 1.2
STORAGE_BACKENDS: tuple[str, ...] = ("file", "memory", "redis")


class SettingsError(Exception):
    """Raised when Prompt Vault configuration cannot be loaded or validated."""


def _dotenv_path() -> Path | None:
    """Return the .env file to read, or ``None`` when disabled or absent."""
    override = os.getenv(ENV_FILE_ENV)
    if override is not None and not override.strip():
        return None
    path = Path(override.strip()).expanduser() if override else DEFAULT_ENV_FILE
    return path if path.is_file() else None


def _dotenv_entries() -> dict[str, str]:
    """Return .env entries as a mapping; ``os.environ`` is left untouched."""
    path = _dotenv_path()
    if path is None:
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def _environment_values(fields: Iterable[str]) -> dict[str, str]:
    """Collect ``PROMPT_VAULT_<FIELD>`` values, preferring the real environment."""
    dotenv = _dotenv_entries()
    values: dict[str, str] = {}
    for name in fields:
        variable = f"{ENV_PREFIX}{name.upper()}"
        raw = os.environ.get(variable, dotenv.get(variable))
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return values


def _config_json_path() -> Path | None:
    """Resolve the JSON config file; an explicitly configured file must exist."""
    explicit = os.getenv(CONFIG_JSON_ENV)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.exists():
            raise SettingsError(f"Configuration file not found: {path}")
        return path
    return DEFAULT_CONFIG_JSON if DEFAULT_CONFIG_JSON.exists() else None


def _read_config_json(path: Path, fields: Iterable[str]) -> dict[str, Any]:
    """Return known settings from the JSON object stored at *path*."""
    try:
        document: object = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
        raise SettingsError(f"Unable to read configuration file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
    if not isinstance(document, Mapping):
        raise SettingsError(f"Configuration file {path} must contain a JSON object")
    known = set(fields)
    selected: dict[str, Any] = {}
    for key, value in cast("Mapping[object, Any]", document).items():
        name = str(key)
        if name not in known:
            logger.warning("Ignoring unknown configuration key %s in %s", name, path)
            continue
        selected[name] = value
    return selected


class PromptVaultSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    catalog_source: str | None = Field(
        default=None,
        description=(
            "URL or filesystem path of the prompt catalogue JSON. Leave empty to use the "
            "catalogue packaged with the application."
        ),
    )
    storage_backend: Literal["file", "memory", "redis"] = Field(
        default="file",
        description="Where favourites and custom prompts are persisted.",
    )
    storage_path: Path = Field(
        default=DEFAULT_STORAGE_PATH,
        description="JSON file used by the 'file' storage backend.",
    )
    redis_dsn: str | None = Field(
        default=None,
        description="Redis connection URL used by the 'redis' storage backend.",
    )
    favorites_key: str = Field(
        default=DEFAULT_FAVORITES_KEY,
        description="Storage key holding the favourites JSON object.",
    )
    custom_prompts_key: str = Field(
        default=DEFAULT_CUSTOM_PROMPTS_KEY,
        description="Storage key holding the custom prompts JSON array.",
    )
    fetch_timeout_seconds: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS,
        description="Timeout applied to remote catalogue requests.",
    )
    copy_feedback_seconds: float = Field(
        default=DEFAULT_COPY_FEEDBACK_SECONDS,
        description="How long the 'copied' indicator stays set after a successful copy.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("catalog_source", "redis_dsn", mode="before")
    def _strip_optional(cls, value: object) -> str | None:
        """Treat blank strings as unset."""
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("storage_path", mode="before")
    def _coerce_storage_path(cls, value: Any) -> Path:
        if value in (None, ""):
            raise ValueError("storage_path must not be empty")
        return Path(str(value)).expanduser()

    @field_validator("storage_backend", mode="before")
    def _normalise_backend(cls, value: object) -> str:
        if value in (None, ""):
            return "file"
        backend = str(value).strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of: {', '.join(STORAGE_BACKENDS)}")
        return backend

    @field_validator("favorites_key", "custom_prompts_key", mode="before")
    def _validate_key(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("storage keys must not be empty")
        return text

    @field_validator("fetch_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("fetch_timeout_seconds must be greater than zero")
        return value

    @field_validator("copy_feedback_seconds")
    def _validate_feedback(cls, value: float) -> float:
        if value < 0:
            raise ValueError("copy_feedback_seconds must not be negative")
        return value

    @model_validator(mode="after")
    def _validate_storage(self) -> PromptVaultSettings:
        if self.favorites_key == self.custom_prompts_key:
            raise ValueError("favorites_key and custom_prompts_key must differ")
        if self.storage_backend == "redis" and not self.redis_dsn:
            raise ValueError("redis_dsn must be provided when storage_backend is 'redis'")
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order sources as keyword overrides, JSON file, environment/.env, secrets."""
        fields = tuple(cls.model_fields)

        def json_source(_: BaseSettings | None = None) -> dict[str, Any]:
            path = _config_json_path()
            return {} if path is None else _read_config_json(path, fields)

        def environment_source(_: BaseSettings | None = None) -> dict[str, Any]:
            return dict(_environment_values(fields))

        return (
            init_settings,
            cast("PydanticBaseSettingsSource", json_source),
            cast("PydanticBaseSettingsSource", environment_source),
            file_secret_settings,
        )


def load_settings(**overrides: Any) -> PromptVaultSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptVaultSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError(f"Invalid Prompt Vault configuration: {exc}") from exc
