# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for tool runners and availability checks."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from ciqa.core.logging import ActionLogger
from ciqa.core.models import RunnerConfig
from ciqa.runtime.process import CommandResult, execute_command
from ciqa.testing import FakeExecutor
from ciqa.tools import RUNNERS, check_tool_availability, log_tool_not_found
from ciqa.tools.runners import PHPMD_DEFAULT_RULESETS


def _config(tmp_path: Path, *files: str, config_path: Path | None = None, timeout: float | None = None) -> RunnerConfig:
    return RunnerConfig(working_directory=tmp_path, file_paths=files, config_path=config_path, timeout=timeout)


@pytest.mark.parametrize(
    ("tool", "expected"),
    [
        (
            "phpstan",
            ["vendor/bin/phpstan", "analyze", "--error-format=json", "--no-progress", "-c", "/cfg", "a.php", "b.php"],
        ),
        ("phpmd", ["vendor/bin/phpmd", "a.php,b.php", "json", "/cfg"]),
        (
            "php-cs-fixer",
            [
                "vendor/bin/php-cs-fixer",
                "fix",
                "--dry-run",
                "--format=json",
                "--diff",
                "--config=/cfg",
                "a.php",
                "b.php",
            ],
        ),
        ("eslint", ["npx", "eslint", "--format=json", "-c", "/cfg", "a.php", "b.php"]),
        ("stylelint", ["npx", "stylelint", "--formatter=json", "--config", "/cfg", "a.php", "b.php"]),
        ("editorconfig", ["vendor/bin/editorconfig-cli", "check", "a.php", "b.php"]),
        ("composer-normalize", ["composer", "normalize", "--dry-run", "/cfg"]),
        (
            "typo3-rector",
            ["vendor/bin/rector", "process", "--dry-run", "--output-format=json", "--config", "/cfg", "a.php", "b.php"],
        ),
    ],
)
def test_runner_argv_with_config(tmp_path: Path, tool: str, expected: list[str]) -> None:
    config = _config(tmp_path, "a.php", "b.php", config_path=Path("/cfg"))
    assert RUNNERS[tool].argv(config) == expected  # type: ignore[index]


def test_runner_argv_defaults_without_config(tmp_path: Path) -> None:
    config = _config(tmp_path)
    assert RUNNERS["phpmd"].argv(config) == ["vendor/bin/phpmd", ".", "json", PHPMD_DEFAULT_RULESETS]
    assert RUNNERS["eslint"].argv(config) == ["npx", "eslint", "--format=json", "."]
    assert RUNNERS["stylelint"].argv(config)[-1] == "**/*.{css,scss}"
    assert RUNNERS["composer-normalize"].argv(config) == ["composer", "normalize", "--dry-run"]


def test_success_follows_exit_code_even_with_issues(
    tmp_path: Path,
    logger: ActionLogger,
    fake_executor: FakeExecutor,
) -> None:
    payload = [{"filePath": "app.js", "messages": [{"ruleId": "semi", "severity": 2, "message": "x", "line": 1}]}]
    fake_executor.ok("npx", "eslint", stdout=json.dumps(payload), exit_code=0)

    result = RUNNERS["eslint"].run(_config(tmp_path, "app.js"), logger=logger, executor=fake_executor)

    assert result.tool == "ESLint"
    assert result.success is True
    assert result.issue_count == 1


def test_failed_exit_without_issues(tmp_path: Path, logger: ActionLogger, fake_executor: FakeExecutor) -> None:
    fake_executor.ok("vendor/bin/phpstan", stdout="", stderr="Fatal error", exit_code=255)

    result = RUNNERS["phpstan"].run(_config(tmp_path, "a.php"), logger=logger, executor=fake_executor)

    assert result.success is False
    assert result.issues == ()
    assert result.raw_output == "Fatal error"


def test_malformed_json_reports_zero_issues_and_warns(
    tmp_path: Path,
    logger: ActionLogger,
    fake_executor: FakeExecutor,
    read_console: Callable[[], str],
) -> None:
    fake_executor.ok("vendor/bin/phpstan", stdout="PHP Warning: not json", exit_code=0)

    result = RUNNERS["phpstan"].run(_config(tmp_path, "a.php"), logger=logger, executor=fake_executor)

    assert result.success is True
    assert result.issue_count == 0
    assert "Failed to parse PHPStan output" in read_console()


def test_rector_text_fallback(tmp_path: Path, logger: ActionLogger, fake_executor: FakeExecutor) -> None:
    fake_executor.ok("vendor/bin/rector", stdout="1) src/Legacy.php\n[OK] 1 file would change", exit_code=0)

    result = RUNNERS["typo3-rector"].run(_config(tmp_path, "src"), logger=logger, executor=fake_executor)

    assert [issue.file for issue in result.issues] == ["src/Legacy.php"]


def test_timeout_is_passed_and_reported(
    tmp_path: Path,
    logger: ActionLogger,
    fake_executor: FakeExecutor,
    read_console: Callable[[], str],
) -> None:
    fake_executor.ok("vendor/bin/phpmd", stderr="Command timed out after 5.0s", exit_code=124)

    result = RUNNERS["phpmd"].run(_config(tmp_path, "a.php", timeout=5), logger=logger, executor=fake_executor)

    assert result.success is False
    assert fake_executor.calls[0][2] == 5
    assert "PHPMD timed out after 5s" in read_console()


def test_runner_propagates_missing_executable(
    tmp_path: Path,
    logger: ActionLogger,
    fake_executor: FakeExecutor,
) -> None:
    with pytest.raises(FileNotFoundError):
        RUNNERS["phpstan"].run(_config(tmp_path), logger=logger, executor=fake_executor)


def test_availability_check(tmp_path: Path, fake_executor: FakeExecutor) -> None:
    fake_executor.ok("vendor/bin/phpstan", "--version", stdout="PHPStan 1.10")
    fake_executor.ok("npx", "eslint", "--version", exit_code=1)
    fake_executor.on("composer", result=PermissionError("denied"))

    assert check_tool_availability("phpstan", tmp_path, executor=fake_executor) is True
    assert check_tool_availability("eslint", tmp_path, executor=fake_executor) is False
    assert check_tool_availability("composer-normalize", tmp_path, executor=fake_executor) is False
    assert check_tool_availability("phpmd", tmp_path, executor=fake_executor) is False
    assert ("vendor/bin/phpstan", "--version") in fake_executor.commands()


def test_log_tool_not_found(logger: ActionLogger, read_console: Callable[[], str]) -> None:
    log_tool_not_found("stylelint", logger)
    output = read_console()
    assert "Tool 'stylelint' is not available." in output
    assert "package.json devDependencies" in output
    assert "Skipping stylelint checks." in output


def test_availability_check_honours_timeout(tmp_path: Path, fake_executor: FakeExecutor) -> None:
    fake_executor.ok("vendor/bin/phpmd", "--version", stderr="Command timed out after 10.0s", exit_code=124)
    fake_executor.ok("vendor/bin/phpstan", "--version", stdout="PHPStan 1.10")

    assert check_tool_availability("phpmd", tmp_path, executor=fake_executor, timeout=10) is False
    assert check_tool_availability("phpstan", tmp_path, executor=fake_executor, timeout=10) is True
    assert fake_executor.timeouts() == {
        ("vendor/bin/phpmd", "--version"): 10,
        ("vendor/bin/phpstan", "--version"): 10,
    }


def _python_output(payload: bytes, exit_code: int) -> Callable[..., CommandResult]:
    script = f"import sys; sys.stdout.buffer.write({payload!r}); sys.exit({exit_code})"

    def _execute(args: Sequence[str], *, cwd: Path, timeout: float | None = None) -> CommandResult:
        return execute_command([sys.executable, "-c", script], cwd=cwd, timeout=timeout)

    return _execute


@pytest.mark.parametrize("exit_code", [0, 1])
def test_undecodable_tool_output_is_still_parsed(tmp_path: Path, logger: ActionLogger, exit_code: int) -> None:
    payload = (
        b'[{"filePath": "caf\xe9.js", "messages": '
        b'[{"ruleId": "semi", "severity": 2, "message": "Missing semicolon", "line": 3}]}]'
    )

    result = RUNNERS["eslint"].run(
        _config(tmp_path, "caf.js"),
        logger=logger,
        executor=_python_output(payload, exit_code),
    )

    assert result.success is (exit_code == 0)
    assert result.issue_count == 1
    assert result.issues[0].file == "caf\ufffd.js"
    assert result.issues[0].line == 3
