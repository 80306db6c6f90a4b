# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration loading (defaults, TOML files, explicit overrides)."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .models import ActionSettings, ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CIQA_FILENAME: Final[str] = ".ciqa.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "ciqa"
# Tables whose keys are tool names rather than setting names.
_VERBATIM_TABLES: Final[frozenset[str]] = frozenset({"configs"})


def _normalise_key(key: str) -> str:
    return key.strip().replace("-", "_").lower()


def _normalise_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Convert kebab-case keys into model field names recursively."""

    normalised: dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = _normalise_key(str(raw_key))
        if isinstance(value, Mapping) and key not in _VERBATIM_TABLES:
            normalised[key] = _normalise_payload(value)
        elif isinstance(value, Mapping):
            normalised[key] = {str(name).strip().lower(): entry for name, entry in value.items()}
        else:
            normalised[key] = value
    return normalised


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base``; ``None`` values in ``override`` are ignored."""

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(value, Mapping):
            merged[key] = _deep_merge(current if isinstance(current, Mapping) else {}, value)
        else:
            merged[key] = value
    return merged


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path`` or an empty mapping when absent.

    Raises:
        ConfigError: If the document cannot be parsed.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration from {path}: {exc}") from exc


def load_pyproject_section(working_directory: Path) -> dict[str, Any]:
    """Return the ``[tool.ciqa]`` table of ``pyproject.toml`` in ``working_directory``."""

    document = _read_toml(working_directory / PYPROJECT_FILENAME)
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return _normalise_payload(section)


def load_ciqa_file(working_directory: Path) -> dict[str, Any]:
    """Return the contents of ``.ciqa.toml`` in ``working_directory``."""

    return _normalise_payload(_read_toml(working_directory / CIQA_FILENAME))


def load_settings(
    working_directory: Path,
    overrides: Mapping[str, Any] | None = None,
) -> ActionSettings:
    """Build :class:`ActionSettings` from all configuration layers.

    Layers, lowest priority first: built-in defaults, ``[tool.ciqa]`` in
    ``pyproject.toml``, ``.ciqa.toml``, then ``overrides`` (typically the CLI
    and CI input values). ``None`` override values leave lower layers intact.

    Args:
        working_directory: Directory containing the optional config files.
        overrides: Explicit values using model field names.

    Returns:
        ActionSettings: Validated settings.

    Raises:
        ConfigError: If a file cannot be parsed or the merged values are invalid.
    """

    merged: dict[str, Any] = {}
    for fragment in (load_pyproject_section(working_directory), load_ciqa_file(working_directory)):
        merged = _deep_merge(merged, fragment)
    merged = _deep_merge(merged, _normalise_payload(overrides or {}))
    merged["working_directory"] = working_directory
    try:
        return ActionSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "CIQA_FILENAME",
    "PYPROJECT_FILENAME",
    "load_ciqa_file",
    "load_pyproject_section",
    "load_settings",
]
