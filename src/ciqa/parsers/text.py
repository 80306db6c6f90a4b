# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for tools without structured output (EditorConfig, Composer Normalize)."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from ..core.models import Issue, RunnerConfig
from ..core.severity import Severity
from ..runtime.process import CommandResult
from .base import iter_pattern_matches

EDITORCONFIG_RULE: Final[str] = "editorconfig"
COMPOSER_NORMALIZE_RULE: Final[str] = "composer-normalize"
COMPOSER_FILE: Final[str] = "composer.json"

_EDITORCONFIG_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<file>.+?):(?P<line>\d+):\s*(?P<message>.+)$")
_EDITORCONFIG_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(.+?\.(?:php|js|ts|css|scss|html|json|yaml|yml))")
_FAILURE_MARK: Final[str] = "✗"
_NOT_NORMALIZED_MARKERS: Final[tuple[str, ...]] = ("is not normalized", "Successfully normalized")
_DIFF_MARKERS: Final[tuple[str, ...]] = ("--- original", "+++ normalized")


def parse_editorconfig(lines: Sequence[str], _config: RunnerConfig) -> Sequence[Issue]:
    """Parse ``editorconfig-cli check`` output.

    ``file:line: message`` lines become warnings at that line. Any other line
    flagged with a failure mark or the word "error" is reported against the
    first file name found in it, at line 1.

    Args:
        lines: Combined stdout and stderr lines.
        _config: Runner configuration (unused).

    Returns:
        Sequence[Issue]: Warnings in output order.
    """

    issues: list[Issue] = []
    for line, match in iter_pattern_matches(lines, _EDITORCONFIG_PATTERN):
        if match is not None:
            issues.append(
                Issue(
                    file=match.group("file"),
                    line=int(match.group("line")),
                    severity=Severity.WARNING,
                    message=match.group("message"),
                    rule=EDITORCONFIG_RULE,
                ),
            )
            continue
        if _FAILURE_MARK not in line and "error" not in line.lower():
            continue
        file_match = _EDITORCONFIG_FILE_PATTERN.search(line)
        if file_match is None:
            continue
        issues.append(
            Issue(
                file=file_match.group(1),
                severity=Severity.WARNING,
                message=line,
                rule=EDITORCONFIG_RULE,
            ),
        )
    return issues


def _composer_issue(path: str, message: str) -> Issue:
    return Issue(file=path, severity=Severity.WARNING, message=message, rule=COMPOSER_NORMALIZE_RULE)


def parse_composer_normalize(result: CommandResult, config: RunnerConfig) -> Sequence[Issue]:
    """Derive issues from a ``composer normalize --dry-run`` invocation.

    A zero exit status means ``composer.json`` is already normalized. Otherwise
    the output is inspected for the "not normalized" notice and for a diff;
    when the command printed nothing a single generic issue is reported.

    Args:
        result: Captured command result, exit status included.
        config: Runner configuration; its config path names the manifest.

    Returns:
        Sequence[Issue]: Zero to two warnings against the manifest.
    """

    if result.ok:
        return []
    path = str(config.config_path) if config.config_path is not None else COMPOSER_FILE
    output = result.output
    if not output:
        return [_composer_issue(path, "composer.json requires normalization")]
    issues: list[Issue] = []
    if any(marker in output for marker in _NOT_NORMALIZED_MARKERS):
        issues.append(
            _composer_issue(path, 'composer.json is not normalized. Run "composer normalize" to fix.'),
        )
    if any(marker in output for marker in _DIFF_MARKERS):
        issues.append(
            _composer_issue(path, "composer.json has formatting or ordering issues. See diff for details."),
        )
    return issues


__all__ = [
    "COMPOSER_FILE",
    "parse_composer_normalize",
    "parse_editorconfig",
]
