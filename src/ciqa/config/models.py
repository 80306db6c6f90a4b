# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the ciqa orchestration package."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..core.constants import (
    ALL_TOOLS_SENTINEL,
    DEFAULT_JS_PATHS,
    DEFAULT_PHP_PATHS,
    DEFAULT_STYLE_PATHS,
    TOOL_NAMES,
)

DEFAULT_CACHE_KEY_PREFIX: Final[str] = "ciqa"
DEFAULT_TOOL_TIMEOUT: Final[float] = 900.0
DEFAULT_CACHE_DIR: Final[Path] = Path.home() / ".cache" / "ciqa"
_PATTERN_DEFAULTS: Final[dict[str, str]] = {
    "php_paths": DEFAULT_PHP_PATHS,
    "js_paths": DEFAULT_JS_PATHS,
    "style_paths": DEFAULT_STYLE_PATHS,
}


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class CacheSettings(BaseModel):
    """Dependency cache switches and the location of the cache store."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    key_prefix: str = DEFAULT_CACHE_KEY_PREFIX
    composer_cache: bool = True
    composer_vendor: bool = True
    npm_cache: bool = True
    node_modules: bool = True
    directory: Path = DEFAULT_CACHE_DIR

    @field_validator("key_prefix")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        """Reject blank cache key prefixes."""

        stripped = value.strip()
        if not stripped:
            raise ValueError("cache key prefix must not be empty")
        return stripped


class ActionSettings(BaseModel):
    """Validated inputs for one orchestration run."""

    model_config = ConfigDict(frozen=True)

    tools: str = ALL_TOOLS_SENTINEL
    php_paths: str = DEFAULT_PHP_PATHS
    js_paths: str = DEFAULT_JS_PATHS
    style_paths: str = DEFAULT_STYLE_PATHS
    configs: Mapping[str, str] = Field(default_factory=dict)
    fail_on_errors: bool = True
    working_directory: Path = Path(".")
    tool_timeout: float | None = DEFAULT_TOOL_TIMEOUT
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @field_validator("php_paths", "js_paths", "style_paths", mode="before")
    @classmethod
    def _default_blank_patterns(cls, value: str | None, info: ValidationInfo) -> str:
        """Treat blank pattern inputs as "use the default"."""

        if value is None or not str(value).strip():
            return _PATTERN_DEFAULTS[info.field_name or ""]
        return str(value)

    @field_validator("configs", mode="before")
    @classmethod
    def _validate_configs(cls, value: Mapping[str, str | None] | None) -> dict[str, str]:
        """Keep non-empty per-tool config paths keyed by known tool names."""

        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("configs must be a mapping of tool name to path")
        cleaned: dict[str, str] = {}
        for key, path in value.items():
            name = str(key).strip().lower()
            if name not in TOOL_NAMES:
                raise ValueError(f"unknown tool in configs: {key}")
            if path is not None and str(path).strip():
                cleaned[name] = str(path).strip()
        return cleaned

    @field_validator("tool_timeout", mode="before")
    @classmethod
    def _validate_timeout(cls, value: float | str | None) -> float | None:
        """Interpret ``0`` as "no timeout" and reject negative values."""

        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_TOOL_TIMEOUT
        try:
            seconds = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"tool timeout must be a number of seconds: {value!r}") from exc
        if seconds < 0:
            raise ValueError("tool timeout must be non-negative")
        return seconds or None

    def config_for(self, tool: str) -> str | None:
        """Return the user supplied config path for ``tool``."""

        return self.configs.get(tool)


__all__ = [
    "DEFAULT_CACHE_DIR",
    "DEFAULT_CACHE_KEY_PREFIX",
    "DEFAULT_TOOL_TIMEOUT",
    "ActionSettings",
    "CacheSettings",
    "ConfigError",
]
