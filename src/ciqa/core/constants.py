# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool identifiers and selection constants."""

from __future__ import annotations

from typing import Final, Literal, get_args

ToolName = Literal[
    "phpstan",
    "phpmd",
    "php-cs-fixer",
    "eslint",
    "stylelint",
    "editorconfig",
    "composer-normalize",
    "typo3-rector",
]

TOOL_NAMES: Final[tuple[ToolName, ...]] = get_args(ToolName)

# Tools excluded from the ``all`` selection; they must be requested by name.
OPT_IN_TOOLS: Final[frozenset[ToolName]] = frozenset({"typo3-rector"})

ALL_TOOLS_SENTINEL: Final[str] = "all"

DEFAULT_PHP_PATHS: Final[str] = "**/*.php"
DEFAULT_JS_PATHS: Final[str] = "**/*.{js,ts,jsx,tsx}"
DEFAULT_STYLE_PATHS: Final[str] = "**/*.{css,scss}"

__all__ = [
    "ALL_TOOLS_SENTINEL",
    "DEFAULT_JS_PATHS",
    "DEFAULT_PHP_PATHS",
    "DEFAULT_STYLE_PATHS",
    "OPT_IN_TOOLS",
    "TOOL_NAMES",
    "ToolName",
]
