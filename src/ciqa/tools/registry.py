# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Closed registry describing every supported tool."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Final, TypeAlias

from ..config.models import ActionSettings
from ..core.constants import OPT_IN_TOOLS, TOOL_NAMES, ToolName
from ..discovery import find_files
from ..parsers.text import COMPOSER_FILE
from .availability import INSTALL_HINTS, VERSION_COMMANDS
from .runners import RUNNERS, ToolRunner

FileSelector: TypeAlias = Callable[[ActionSettings], list[str]]


def _php_files(settings: ActionSettings) -> list[str]:
    return find_files(settings.php_paths, settings.working_directory)


def _js_files(settings: ActionSettings) -> list[str]:
    return find_files(settings.js_paths, settings.working_directory)


def _style_files(settings: ActionSettings) -> list[str]:
    return find_files(settings.style_paths, settings.working_directory)


def _whole_tree(_settings: ActionSettings) -> list[str]:
    return ["."]


def _composer_manifest(settings: ActionSettings) -> list[str]:
    return [COMPOSER_FILE] if (settings.working_directory / COMPOSER_FILE).is_file() else []


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static description of one tool.

    Attributes:
        name: Tool identifier, also the key of its ``configs`` entry.
        runner: Runner invoking the analyser.
        select_files: Callable choosing the files the tool is run on.
        opt_in: Whether the tool is left out of the ``all`` selection.
    """

    name: ToolName
    runner: ToolRunner
    select_files: FileSelector
    opt_in: bool = False

    @property
    def display_name(self) -> str:
        """Return the human readable tool name."""

        return self.runner.display_name


_FILE_SELECTORS: Final[Mapping[ToolName, FileSelector]] = {
    "phpstan": _php_files,
    "phpmd": _php_files,
    "php-cs-fixer": _php_files,
    "eslint": _js_files,
    "stylelint": _style_files,
    "editorconfig": _whole_tree,
    "composer-normalize": _composer_manifest,
    "typo3-rector": _php_files,
}


def _build_specs() -> dict[ToolName, ToolSpec]:
    """Assemble the registry and check it covers exactly the known tool names.

    Raises:
        RuntimeError: If a table is missing a tool or names an unknown one.
    """

    tables: dict[str, Mapping[ToolName, object]] = {
        "runners": RUNNERS,
        "file selectors": _FILE_SELECTORS,
        "version commands": VERSION_COMMANDS,
        "install hints": INSTALL_HINTS,
    }
    expected = set(TOOL_NAMES)
    for label, table in tables.items():
        if set(table) != expected:
            missing = sorted(expected - set(table))
            extra = sorted(set(table) - expected)
            raise RuntimeError(f"Tool {label} out of sync: missing={missing} unexpected={extra}")
    return {
        name: ToolSpec(
            name=name,
            runner=RUNNERS[name],
            select_files=_FILE_SELECTORS[name],
            opt_in=name in OPT_IN_TOOLS,
        )
        for name in TOOL_NAMES
    }


TOOL_SPECS: Final[Mapping[ToolName, ToolSpec]] = _build_specs()


def get_tool_spec(name: str) -> ToolSpec | None:
    """Return the registry entry for ``name`` or ``None`` when unknown."""

    return TOOL_SPECS.get(name)  # type: ignore[call-overload]


def iter_default_tools() -> Iterator[ToolSpec]:
    """Yield the tools included in the ``all`` selection, in registry order."""

    for name in TOOL_NAMES:
        spec = TOOL_SPECS[name]
        if not spec.opt_in:
            yield spec


__all__ = [
    "TOOL_SPECS",
    "FileSelector",
    "ToolSpec",
    "get_tool_spec",
    "iter_default_tools",
]
