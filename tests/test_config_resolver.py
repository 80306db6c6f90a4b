# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for per-tool configuration file resolution."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from ciqa.config.resolver import CONFIG_FILENAMES, DEFAULTS_DIR, ConfigResolver
from ciqa.core.constants import TOOL_NAMES
from ciqa.core.logging import ActionLogger


def _defaults(tmp_path: Path) -> Path:
    defaults = tmp_path / "bundled"
    defaults.mkdir()
    (defaults / "phpstan.neon").write_text("parameters: {}\n", encoding="utf-8")
    return defaults


def test_custom_path_wins_when_it_exists(tmp_path: Path, logger: ActionLogger) -> None:
    project = tmp_path / "project"
    (project / "qa").mkdir(parents=True)
    (project / "qa" / "phpstan.neon").write_text("", encoding="utf-8")
    (project / "phpstan.neon").write_text("", encoding="utf-8")
    resolver = ConfigResolver(logger, defaults_dir=_defaults(tmp_path))

    resolved = resolver.resolve("phpstan", "qa/phpstan.neon", project)

    assert resolved == (project / "qa" / "phpstan.neon").resolve()


def test_missing_custom_path_falls_back_to_repository_file(
    tmp_path: Path,
    logger: ActionLogger,
    read_console: Callable[[], str],
) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "phpstan.neon.dist").write_text("", encoding="utf-8")
    resolver = ConfigResolver(logger, defaults_dir=_defaults(tmp_path))

    resolved = resolver.resolve("phpstan", "missing.neon", project)

    assert resolved == (project / "phpstan.neon.dist").resolve()
    output = read_console()
    assert "Custom config not found for phpstan: missing.neon" in output
    assert "Found repository config for phpstan: phpstan.neon.dist" in output


def test_repository_file_wins_over_bundled_default(tmp_path: Path, logger: ActionLogger) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "phpstan.neon").write_text("", encoding="utf-8")
    (project / "phpstan.neon.dist").write_text("", encoding="utf-8")
    resolver = ConfigResolver(logger, defaults_dir=_defaults(tmp_path))

    assert resolver.resolve("phpstan", None, project) == (project / "phpstan.neon").resolve()


def test_bundled_default_used_when_repository_has_none(tmp_path: Path, logger: ActionLogger) -> None:
    project = tmp_path / "project"
    project.mkdir()
    defaults = _defaults(tmp_path)
    resolver = ConfigResolver(logger, defaults_dir=defaults)

    assert resolver.resolve("phpstan", "", project) == defaults / "phpstan.neon"


def test_no_config_found_returns_none(
    tmp_path: Path,
    logger: ActionLogger,
    read_console: Callable[[], str],
) -> None:
    project = tmp_path / "project"
    project.mkdir()
    resolver = ConfigResolver(logger, defaults_dir=_defaults(tmp_path))

    assert resolver.resolve("typo3-rector", None, project) is None
    assert "No custom config for typo3-rector" in read_console()


@pytest.mark.parametrize("tool", TOOL_NAMES)
def test_every_tool_has_conventional_filenames(tool: str) -> None:
    assert CONFIG_FILENAMES[tool]


def test_shipped_defaults_exist(logger: ActionLogger) -> None:
    resolver = ConfigResolver(logger)
    for tool in ("phpstan", "phpmd", "php-cs-fixer", "eslint", "stylelint"):
        default = resolver.bundled_default(tool)
        assert default is not None
        assert default.parent == DEFAULTS_DIR
    assert resolver.bundled_default("editorconfig") is None
