# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for JavaScript and stylesheet tooling."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from ..core.models import Issue, JsonValue, RunnerConfig
from ..core.serialization import coerce_optional_int, coerce_optional_str, iter_dicts
from ..core.severity import Severity, severity_from_label, severity_from_level

_ESLINT_ERROR_LEVEL: Final[int] = 2
_STYLELINT_SEVERITIES: Final[dict[str, Severity]] = {"error": Severity.ERROR}


def parse_eslint(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse ESLint JSON diagnostics into issues.

    Args:
        payload: JSON payload produced by ESLint when invoked with ``--format=json``.
        _config: Runner configuration (unused).

    Returns:
        Sequence[Issue]: Issues derived from the ESLint result set; severity
        level ``2`` maps to errors, everything else to warnings.
    """
    results: list[Issue] = []
    for entry in iter_dicts(payload):
        path = coerce_optional_str(entry.get("filePath")) or ""
        for message in iter_dicts(entry.get("messages")):
            level = coerce_optional_int(message.get("severity"))
            results.append(
                Issue(
                    file=path,
                    line=coerce_optional_int(message.get("line")),
                    column=coerce_optional_int(message.get("column")),
                    severity=severity_from_level(level, error_level=_ESLINT_ERROR_LEVEL),
                    message=(coerce_optional_str(message.get("message")) or "").strip(),
                    rule=coerce_optional_str(message.get("ruleId")),
                ),
            )
    return results


def parse_stylelint(payload: JsonValue, _config: RunnerConfig) -> Sequence[Issue]:
    """Parse stylelint JSON diagnostics into issues.

    Args:
        payload: JSON payload produced by stylelint with ``--formatter=json``.
        _config: Runner configuration (unused).

    Returns:
        Sequence[Issue]: Issues describing stylelint findings.
    """
    results: list[Issue] = []
    for entry in iter_dicts(payload):
        source = coerce_optional_str(entry.get("source")) or ""
        for warning in iter_dicts(entry.get("warnings")):
            results.append(
                Issue(
                    file=source,
                    line=coerce_optional_int(warning.get("line")),
                    column=coerce_optional_int(warning.get("column")),
                    severity=severity_from_label(warning.get("severity"), mapping=_STYLELINT_SEVERITIES),
                    message=coerce_optional_str(warning.get("text")) or "",
                    rule=coerce_optional_str(warning.get("rule")),
                ),
            )
    return results


__all__ = [
    "parse_eslint",
    "parse_stylelint",
]
