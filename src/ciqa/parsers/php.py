# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for PHP analysers (PHPStan, PHPMD, PHP-CS-Fixer, Rector)."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Final

from ..core.models import Issue, JsonValue, RunnerConfig
from ..core.serialization import coerce_optional_int, coerce_optional_str, iter_dicts
from ..core.severity import Severity, severity_from_priority

PHPSTAN_RULE: Final[str] = "phpstan"
PHP_CS_FIXER_RULE: Final[str] = "php-cs-fixer"
RECTOR_RULE: Final[str] = "typo3-rector"
_PHPMD_ERROR_PRIORITY: Final[int] = 3
_RECTOR_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"([^\s]+\.php)")
_RECTOR_LIST_ITEM: Final[re.Pattern[str]] = re.compile(r"^\s*\d+\)")
_RECTOR_FILE_MARKER: Final[str] = "[FILE]"


def parse_phpstan(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse PHPStan ``--error-format=json`` output.

    Every PHPStan message is an error; the rule is the message identifier when
    PHPStan provides one.

    Args:
        payload: JSON document emitted by PHPStan.
        _config: Runner configuration (unused).

    Returns:
        Sequence[Issue]: Issues in file then message order.
    """

    if not isinstance(payload, Mapping):
        return []
    files = payload.get("files")
    if not isinstance(files, Mapping):
        return []
    issues: list[Issue] = []
    for path, file_data in files.items():
        if not isinstance(file_data, Mapping):
            continue
        for message in iter_dicts(file_data.get("messages")):
            issues.append(
                Issue(
                    file=str(path),
                    line=coerce_optional_int(message.get("line")),
                    column=coerce_optional_int(message.get("column")),
                    severity=Severity.ERROR,
                    message=coerce_optional_str(message.get("message")) or "",
                    rule=coerce_optional_str(message.get("identifier")) or PHPSTAN_RULE,
                ),
            )
    return issues


def parse_phpmd(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse PHPMD ``json`` renderer output.

    Violations with priority 1 to 3 are errors, lower priorities warnings.
    """

    if not isinstance(payload, Mapping):
        return []
    issues: list[Issue] = []
    for file_data in iter_dicts(payload.get("files")):
        path = coerce_optional_str(file_data.get("file")) or ""
        for violation in iter_dicts(file_data.get("violations")):
            priority = coerce_optional_int(violation.get("priority"))
            issues.append(
                Issue(
                    file=path,
                    line=coerce_optional_int(violation.get("beginLine")),
                    column=coerce_optional_int(violation.get("beginColumn")),
                    severity=severity_from_priority(priority, threshold=_PHPMD_ERROR_PRIORITY),
                    message=coerce_optional_str(violation.get("description")) or "",
                    rule=coerce_optional_str(violation.get("rule")),
                ),
            )
    return issues


def _applied_fixers(file_data: Mapping[str, JsonValue]) -> str:
    fixers = file_data.get("appliedFixers")
    if isinstance(fixers, list):
        names = [str(name) for name in fixers if name]
        if names:
            return ", ".join(names)
    return "See diff for details"


def parse_php_cs_fixer(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse PHP-CS-Fixer ``--format=json`` output.

    One warning is reported per file carrying a diff, listing the fixers
    that would be applied.
    """

    if not isinstance(payload, Mapping):
        return []
    issues: list[Issue] = []
    for file_data in iter_dicts(payload.get("files")):
        if not file_data.get("diff"):
            continue
        issues.append(
            Issue(
                file=coerce_optional_str(file_data.get("name")) or "",
                severity=Severity.WARNING,
                message=f"Code style issues found. {_applied_fixers(file_data)}",
                rule=PHP_CS_FIXER_RULE,
            ),
        )
    return issues


def parse_rector_json(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse Rector ``--output-format=json`` output.

    Nothing is reported unless ``totals.changed_files`` is positive. Each diff
    becomes a warning attributed to the rector class that produced it; a file
    listed without diffs yields a single generic warning.

    Args:
        payload: JSON document emitted by Rector.
        _config: Runner configuration (unused).

    Returns:
        Sequence[Issue]: Refactoring suggestions as warnings.
    """

    if not isinstance(payload, Mapping):
        return []
    totals = payload.get("totals")
    changed = coerce_optional_int(totals.get("changed_files")) if isinstance(totals, Mapping) else None
    if not changed or changed <= 0:
        return []
    issues: list[Issue] = []
    for file_diff in iter_dicts(payload.get("file_diffs")):
        path = coerce_optional_str(file_diff.get("file")) or ""
        diffs = list(iter_dicts(file_diff.get("diffs")))
        if not diffs:
            issues.append(
                Issue(
                    file=path,
                    severity=Severity.WARNING,
                    message="File has refactoring opportunities",
                    rule=RECTOR_RULE,
                ),
            )
            continue
        for diff in diffs:
            detail = coerce_optional_str(diff.get("message")) or "Code can be refactored"
            issues.append(
                Issue(
                    file=path,
                    severity=Severity.WARNING,
                    message=f"Rector suggests changes: {detail}",
                    rule=coerce_optional_str(diff.get("rector_class")) or RECTOR_RULE,
                ),
            )
    return issues


def parse_rector_text(lines: Sequence[str], _config: RunnerConfig) -> Sequence[Issue]:
    """Scrape file names from Rector's human-readable output.

    Used when the JSON output cannot be decoded: lines carrying a ``[FILE]``
    marker or starting with a numbered list item name a PHP file to refactor.
    """

    issues: list[Issue] = []
    for line in lines:
        if _RECTOR_FILE_MARKER not in line and not _RECTOR_LIST_ITEM.match(line):
            continue
        match = _RECTOR_FILE_PATTERN.search(line)
        if match is None:
            continue
        issues.append(
            Issue(
                file=match.group(1),
                severity=Severity.WARNING,
                message="Rector suggests refactoring for this file",
                rule=RECTOR_RULE,
            ),
        )
    return issues


__all__ = [
    "parse_php_cs_fixer",
    "parse_phpmd",
    "parse_phpstan",
    "parse_rector_json",
    "parse_rector_text",
]
