# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for subprocess execution and workflow command helpers."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from ciqa.core import logging as logging_module
from ciqa.core.logging import GITHUB_LOG_WIDTH, ActionLogger, build_logger
from ciqa.runtime.process import TIMEOUT_EXIT_CODE, execute_command
from ciqa.runtime.workflow import (
    append_output,
    append_step_summary,
    format_command,
    is_github_actions,
    resolve_env_file,
)


def test_execute_command_captures_output(tmp_path: Path) -> None:
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"
    result = execute_command([sys.executable, "-c", script], cwd=tmp_path)
    assert result.exit_code == 3
    assert result.stdout == "out"
    assert result.stderr == "err"
    assert result.output == "outerr"
    assert result.ok is False


def test_execute_command_timeout(tmp_path: Path) -> None:
    result = execute_command([sys.executable, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)
    assert result.exit_code == TIMEOUT_EXIT_CODE
    assert "timed out" in result.stderr


def test_execute_command_replaces_undecodable_bytes(tmp_path: Path) -> None:
    script = "import sys; sys.stdout.buffer.write(b'caf\\xe9'); sys.stderr.buffer.write(b'\\xff'); sys.exit(1)"
    result = execute_command([sys.executable, "-c", script], cwd=tmp_path)
    assert result.exit_code == 1
    assert result.stdout == "caf\ufffd"
    assert result.stderr == "\ufffd"


def test_execute_command_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        execute_command(["vendor/bin/phpstan", "--version"], cwd=tmp_path)
    with pytest.raises(ValueError):
        execute_command([], cwd=tmp_path)


def test_format_command() -> None:
    assert format_command("group", "Restoring cache") == "::group::Restoring cache"
    assert format_command("error", "a\nb", {"file": "x,y:z", "line": 2, "col": None}) == (
        "::error file=x%2Cy%3Az,line=2::a%0Ab"
    )


def test_is_github_actions() -> None:
    assert is_github_actions({"GITHUB_ACTIONS": "true"}) is True
    assert is_github_actions({"GITHUB_ACTIONS": "false"}) is False
    assert is_github_actions({}) is False


def test_resolve_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "out"))
    assert resolve_env_file("GITHUB_OUTPUT") == tmp_path / "out"
    assert resolve_env_file("GITHUB_OUTPUT", tmp_path / "explicit") == tmp_path / "explicit"
    monkeypatch.setenv("GITHUB_OUTPUT", "  ")
    assert resolve_env_file("GITHUB_OUTPUT") is None


def test_append_output_and_summary(tmp_path: Path) -> None:
    output = tmp_path / "out"
    append_output(output, "status", "success")
    append_output(output, "report", "{\n}")
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "status=success"
    assert lines[1].startswith("report<<")
    assert lines[2:4] == ["{", "}"]
    assert lines[4] == lines[1].split("<<", 1)[1]

    summary = tmp_path / "summary.md"
    append_step_summary(summary, "# One")
    append_step_summary(summary, "# Two\n")
    assert summary.read_text(encoding="utf-8") == "# One\n# Two\n"


def test_logger_uses_workflow_commands_in_ci(github_logger: ActionLogger, read_console: Callable[[], str]) -> None:
    github_logger.warn("careful: 50%")
    github_logger.debug("details")
    with github_logger.group("Saving cache"):
        github_logger.error("broken")
    assert read_console().splitlines() == [
        "::warning::careful: 50%25",
        "::debug::details",
        "::group::Saving cache",
        "::error::broken",
        "::endgroup::",
    ]


def test_logger_debug_outside_ci(logger: ActionLogger, read_console: Callable[[], str]) -> None:
    logger.debug("lookup")
    logger.info("hello")
    assert read_console().splitlines() == ["[debug] lookup", "hello"]


def test_build_logger_in_github_actions_keeps_colour_without_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_module, "_stdout_is_tty", lambda: False)
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    logger = build_logger(emoji=False)

    assert logger.github is True
    assert logger.use_color is True
    assert logger.console.is_terminal is True
    assert logger.console.color_system == "standard"
    assert logger.console.width == GITHUB_LOG_WIDTH

    plain = build_logger(emoji=False, no_color=True)

    assert plain.github is True
    assert plain.use_color is False
    assert plain.console.color_system is None
    assert plain.console.width == GITHUB_LOG_WIDTH


def test_build_logger_outside_ci_follows_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_module, "_stdout_is_tty", lambda: False)

    logger = build_logger(emoji=False, github=False)

    assert logger.github is False
    assert logger.use_color is None
    assert logger.console.is_terminal is False
    assert logger.console.color_system is None
    assert build_logger(emoji=False, github=False).console is logger.console
