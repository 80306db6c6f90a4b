# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Binary severity scale every tool vocabulary is folded into."""

    ERROR = "error"
    WARNING = "warning"


_LABEL_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "fatal": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
}


def severity_from_label(
    label: object,
    *,
    mapping: Mapping[str, Severity] | None = None,
    default: Severity = Severity.WARNING,
) -> Severity:
    """Return the severity matching a textual ``label``.

    Args:
        label: Raw severity label emitted by a tool.
        mapping: Optional lower-case label mapping overriding the defaults.
        default: Severity used when the label is unknown or not a string.

    Returns:
        Severity: Severity derived from ``label``.
    """

    if not isinstance(label, str):
        return default
    table = mapping if mapping is not None else _LABEL_SEVERITIES
    return table.get(label.strip().lower(), default)


def severity_from_level(level: int | None, *, error_level: int, default: Severity = Severity.WARNING) -> Severity:
    """Return :attr:`Severity.ERROR` when ``level`` equals ``error_level``.

    Args:
        level: Numeric severity level reported by the tool.
        error_level: Level the tool uses for errors.
        default: Severity returned for every other level.

    Returns:
        Severity: Severity derived from the numeric level.
    """

    if level == error_level:
        return Severity.ERROR
    return default


def severity_from_priority(priority: int | None, *, threshold: int) -> Severity:
    """Map a 1-based priority scale onto the binary severity scale.

    Priorities at or below ``threshold`` are errors; missing priorities are
    treated as warnings.

    Args:
        priority: Priority reported by the tool (1 is the most severe).
        threshold: Highest priority still considered an error.

    Returns:
        Severity: Severity derived from the priority.
    """

    if priority is not None and priority <= threshold:
        return Severity.ERROR
    return Severity.WARNING


__all__ = [
    "Severity",
    "severity_from_label",
    "severity_from_level",
    "severity_from_priority",
]
