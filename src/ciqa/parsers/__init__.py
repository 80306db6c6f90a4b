# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Output parsers converting tool output into issues."""

from __future__ import annotations

from .base import JsonParser, OutputParseError, ParseChain, Parser, ResultParser, TextParser
from .javascript import parse_eslint, parse_stylelint
from .php import parse_php_cs_fixer, parse_phpmd, parse_phpstan, parse_rector_json, parse_rector_text
from .text import parse_composer_normalize, parse_editorconfig

__all__ = [
    "JsonParser",
    "OutputParseError",
    "ParseChain",
    "Parser",
    "ResultParser",
    "TextParser",
    "parse_composer_normalize",
    "parse_editorconfig",
    "parse_eslint",
    "parse_php_cs_fixer",
    "parse_phpmd",
    "parse_phpstan",
    "parse_rector_json",
    "parse_rector_text",
]
