# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing tool payloads and serializing results."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from .models import Issue, JsonValue, ToolResult

SerializableMapping = dict[str, JsonValue]


def coerce_optional_int(value: JsonValue | None) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_optional_str(value: JsonValue | None) -> str | None:
    """Return ``value`` as a string, or ``None`` when absent or empty."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    return str(value)


def iter_dicts(value: JsonValue | None) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def serialize_issue(issue: Issue) -> SerializableMapping:
    """Convert an issue into a JSON-friendly mapping, omitting absent fields."""
    payload: SerializableMapping = {
        "file": issue.file,
        "line": issue.line,
    }
    if issue.column is not None:
        payload["column"] = issue.column
    payload["severity"] = issue.severity.value
    payload["message"] = issue.message
    if issue.rule is not None:
        payload["rule"] = issue.rule
    return payload


def serialize_result(result: ToolResult) -> SerializableMapping:
    """Serialize a tool result into the per-tool report entry."""
    return {
        "tool": result.tool,
        "success": result.success,
        "issueCount": result.issue_count,
        "errors": result.error_count,
        "warnings": result.warning_count,
        "issues": [serialize_issue(issue) for issue in result.issues],
    }


__all__ = [
    "SerializableMapping",
    "coerce_optional_int",
    "coerce_optional_str",
    "iter_dicts",
    "serialize_issue",
    "serialize_result",
]
