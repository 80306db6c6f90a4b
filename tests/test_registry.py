# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the tool registry and tool selection."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

from ciqa.config.models import ActionSettings
from ciqa.core.constants import TOOL_NAMES
from ciqa.execution import select_tools
from ciqa.tools import TOOL_SPECS, get_tool_spec, iter_default_tools

WriteFiles = Callable[[Mapping[str, str]], Path]


def test_registry_covers_every_tool() -> None:
    assert tuple(TOOL_SPECS) == TOOL_NAMES
    for name, spec in TOOL_SPECS.items():
        assert spec.name == name
        assert spec.runner.name == name


def test_only_rector_is_opt_in() -> None:
    assert [spec.name for spec in TOOL_SPECS.values() if spec.opt_in] == ["typo3-rector"]
    assert "typo3-rector" not in [spec.name for spec in iter_default_tools()]


def test_get_tool_spec() -> None:
    spec = get_tool_spec("composer-normalize")
    assert spec is not None
    assert spec.display_name == "Composer Normalize"
    assert get_tool_spec("psalm") is None


def test_select_all_excludes_opt_in_tools() -> None:
    for raw in ("all", " ALL ", "", None):
        selection = select_tools(raw)
        assert selection.names == tuple(name for name in TOOL_NAMES if name != "typo3-rector")
        assert selection.unknown == ()


def test_select_explicit_tools_keeps_order_and_dedupes() -> None:
    selection = select_tools("ESLint, phpstan,eslint,,typo3-rector")
    assert selection.names == ("eslint", "phpstan", "typo3-rector")


def test_select_reports_unknown_names() -> None:
    selection = select_tools("phpstan,psalm,rector")
    assert selection.names == ("phpstan",)
    assert selection.unknown == ("psalm", "rector")


def test_file_selectors(write_files: WriteFiles) -> None:
    root = write_files({"src/A.php": "", "web/app.js": "", "css/site.scss": ""})
    settings = ActionSettings(working_directory=root)

    assert TOOL_SPECS["phpstan"].select_files(settings) == ["src/A.php"]
    assert TOOL_SPECS["eslint"].select_files(settings) == ["web/app.js"]
    assert TOOL_SPECS["stylelint"].select_files(settings) == ["css/site.scss"]
    assert TOOL_SPECS["editorconfig"].select_files(settings) == ["."]
    assert TOOL_SPECS["composer-normalize"].select_files(settings) == []

    (root / "composer.json").write_text("{}", encoding="utf-8")
    assert TOOL_SPECS["composer-normalize"].select_files(settings) == ["composer.json"]
