"""Settings for changedir.

Handles loading and validating settings from multiple sources:
    - An optional TOML/JSON settings file
    - Environment variables (CHANGEDIR_* prefix)
    - Default values

The settings only relocate the two data files and tune the search limits;
bookmarks and history themselves always live in their flat files.

Key components:
    - AppConfig: Settings model
    - load_config(): Safe loading with fallback to defaults
    - ConfigLoadResult: Metadata about where settings came from
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from changedir.core.result import ConfigurationError

CONFIG_ENV_VAR = "CHANGEDIR_CONFIG"

BOOKMARK_FILE = ".local/changeDirectory"
HISTORY_FILE = ".local/changeDirectoryHistory"

# One bookmark per slot label, see changedir.core.slots.
MAX_BOOKMARKS = 36
MAX_HISTORY = 10
ANCESTOR_SEARCH_DEPTH = 5
MAX_SUBDIRS = 36


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


class AppConfig(BaseSettings):
    """Data file locations and navigation limits."""

    model_config = SettingsConfigDict(
        env_prefix="CHANGEDIR_",
        extra="ignore",
    )

    bookmark_file: Path = Field(
        default_factory=lambda: Path.home() / BOOKMARK_FILE,
        description="File holding the bookmark list, one path per line.",
    )
    history_file: Path = Field(
        default_factory=lambda: Path.home() / HISTORY_FILE,
        description="File holding the visit history, most recent first.",
    )
    # A move records origin and destination, so --back needs two entries.
    history_limit: int = Field(
        default=MAX_HISTORY, ge=2, description="Maximum number of history entries kept."
    )
    search_depth: int = Field(
        default=ANCESTOR_SEARCH_DEPTH,
        ge=0,
        description="Number of ancestor levels searched when resolving a name.",
    )
    subdir_limit: int = Field(
        default=MAX_SUBDIRS,
        ge=1,
        le=MAX_SUBDIRS,
        description="Maximum number of subdirectories offered by --down.",
    )
    log_level: str = Field(default="WARNING", description="Log level for diagnostics.")

    @field_validator("bookmark_file", "history_file", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Environment variables override settings file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    candidate = (
        config_path
        or env_vars.get(CONFIG_ENV_VAR)
        or (Path.home() / ".config" / "changedir" / "config.toml")
    )
    return Path(candidate).expanduser()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

    suffix = path.suffix.lower()
    parser = json.loads if suffix == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    prefix = AppConfig.model_config.get("env_prefix", "")
    return {
        field for field in AppConfig.model_fields if f"{prefix}{field}".upper() in env_vars
    }


def _fallback_config() -> AppConfig:
    """Environment-only settings, or plain defaults if the environment is invalid too."""
    try:
        return AppConfig()
    except ValidationError:
        return AppConfig.model_construct()


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load settings with Safe Mode fallback.
    If the file or environment is invalid, returns defaults + error message.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(config_path, env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigurationError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    with context_manager:
        try:
            config = AppConfig(**file_data)
        except ValidationError as exc:
            error = str(exc)
            config = _fallback_config()

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result
