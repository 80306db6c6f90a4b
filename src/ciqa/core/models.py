# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the ciqa package."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = "JsonScalar | list[JsonValue] | dict[str, JsonValue]"

DEFAULT_LINE = 1


class Issue(BaseModel):
    """Standardize a single tool finding into the common issue schema.

    ``file`` is kept exactly as the tool reported it; no normalisation is
    attempted because tools disagree on absolute versus relative paths.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = DEFAULT_LINE
    column: int | None = None
    severity: Severity
    message: str
    rule: str | None = None

    @field_validator("line", mode="before")
    @classmethod
    def _default_line(cls, value: int | str | None) -> int:
        """Fall back to the first line when the tool omits a usable value.

        Args:
            value: Raw line number reported by the tool.

        Returns:
            int: 1-based line number.
        """

        if value is None or isinstance(value, bool):
            return DEFAULT_LINE
        try:
            line = int(value)
        except (TypeError, ValueError):
            return DEFAULT_LINE
        return line if line >= DEFAULT_LINE else DEFAULT_LINE

    @field_validator("column", mode="before")
    @classmethod
    def _positive_column(cls, value: int | str | None) -> int | None:
        """Drop columns that are not 1-based integers.

        Args:
            value: Raw column number reported by the tool.

        Returns:
            int | None: Column number or ``None`` when unusable.
        """

        if value is None or isinstance(value, bool):
            return None
        try:
            column = int(value)
        except (TypeError, ValueError):
            return None
        return column if column >= 1 else None


class ToolResult(BaseModel):
    """Capture the outcome of running one tool once.

    ``success`` mirrors the tool's process exit status and is never derived
    from the number of issues: a tool may exit cleanly while reporting
    advisory findings, or fail for infrastructure reasons without any.
    """

    model_config = ConfigDict(frozen=True)

    tool: str
    success: bool
    issues: tuple[Issue, ...] = Field(default_factory=tuple)
    raw_output: str = ""

    @field_validator("issues", mode="before")
    @classmethod
    def _coerce_issues(cls, value: Sequence[Issue] | None) -> tuple[Issue, ...]:
        """Freeze the issue sequence while preserving discovery order."""

        if value is None:
            return ()
        return tuple(value)

    @property
    def issue_count(self) -> int:
        """Return the number of issues reported by the tool."""

        return len(self.issues)

    @property
    def error_count(self) -> int:
        """Return the number of error-level issues."""

        return sum(1 for issue in self.issues if issue.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Return the number of warning-level issues."""

        return sum(1 for issue in self.issues if issue.severity is Severity.WARNING)


class RunnerConfig(BaseModel):
    """Input contract handed to a runner for a single invocation."""

    model_config = ConfigDict(frozen=True)

    working_directory: Path
    file_paths: tuple[str, ...] = Field(default_factory=tuple)
    config_path: Path | None = None
    timeout: float | None = None

    @field_validator("file_paths", mode="before")
    @classmethod
    def _coerce_files(cls, value: Sequence[str | Path] | None) -> tuple[str, ...]:
        """Normalise file collections into tuples of strings."""

        if value is None:
            return ()
        if isinstance(value, (str, Path)):
            return (str(value),)
        return tuple(str(item) for item in value)


def total_issue_count(results: Sequence[ToolResult]) -> int:
    """Return the number of issues across ``results``.

    Args:
        results: Tool results collected during a run.

    Returns:
        int: Sum of issue counts.
    """

    return sum(result.issue_count for result in results)


__all__ = [
    "DEFAULT_LINE",
    "Issue",
    "JsonScalar",
    "JsonValue",
    "RunnerConfig",
    "ToolResult",
    "total_issue_count",
]
