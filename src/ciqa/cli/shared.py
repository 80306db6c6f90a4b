# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers shared by the ciqa CLI commands."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import typer

from ..config import ActionSettings, ConfigError, load_settings
from ..core.logging import ActionLogger, build_logger

INPUT_ENV_PREFIX: Final[str] = "INPUT_"
STATE_FILE_ENV: Final[str] = "CIQA_CACHE_STATE"
STATE_FILENAME: Final[str] = "ciqa-cache-state.json"
RUNNER_TEMP_ENV: Final[str] = "RUNNER_TEMP"


def input_env(name: str) -> str:
    """Return the environment variable GitHub Actions uses for input ``name``."""

    return f"{INPUT_ENV_PREFIX}{name.upper()}"


def default_state_file() -> Path:
    """Return the cache state file location shared by ``cache restore`` and ``cache save``."""

    base = os.environ.get(RUNNER_TEMP_ENV) or tempfile.gettempdir()
    return Path(base) / STATE_FILENAME


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> ActionLogger:
    """Return the logger used by CLI commands."""

    return build_logger(emoji=emoji, debug=debug, no_color=no_color)


def resolve_working_directory(path: Path | None) -> Path:
    """Return ``path`` (default: the current directory) as an absolute directory.

    Raises:
        typer.BadParameter: If the directory does not exist.
    """

    resolved = (path or Path.cwd()).expanduser().resolve()
    if not resolved.is_dir():
        raise typer.BadParameter(f"Working directory does not exist: {resolved}")
    return resolved


def load_cli_settings(working_directory: Path, overrides: Mapping[str, Any]) -> ActionSettings:
    """Load settings for ``working_directory`` applying CLI ``overrides``.

    Raises:
        typer.BadParameter: If the configuration is invalid.
    """

    try:
        return load_settings(working_directory, overrides)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def cache_overrides(
    *,
    enabled: bool | None,
    key_prefix: str | None,
    composer_cache: bool | None,
    composer_vendor: bool | None,
    npm_cache: bool | None,
    node_modules: bool | None,
    directory: Path | None,
) -> dict[str, Any]:
    """Collect cache related CLI values into the ``cache`` settings table."""

    return {
        "enabled": enabled,
        "key_prefix": key_prefix,
        "composer_cache": composer_cache,
        "composer_vendor": composer_vendor,
        "npm_cache": npm_cache,
        "node_modules": node_modules,
        "directory": directory,
    }


__all__ = [
    "build_cli_logger",
    "cache_overrides",
    "default_state_file",
    "input_env",
    "load_cli_settings",
    "resolve_working_directory",
]
