# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render issues as GitHub Actions annotation workflow commands."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from rich.console import Console

from ..core.models import Issue, ToolResult
from ..core.severity import Severity
from ..runtime.workflow import format_command


def annotation_message(tool: str, issue: Issue) -> str:
    """Return the annotation text ``[tool - rule] message``."""

    label = f"{tool} - {issue.rule}" if issue.rule else tool
    return f"[{label}] {issue.message}"


def format_annotation(tool: str, issue: Issue) -> str:
    """Render ``issue`` as an ``::error`` or ``::warning`` workflow command.

    Args:
        tool: Display name of the tool that reported the issue.
        issue: Issue to annotate.

    Returns:
        str: Workflow command line.
    """

    command = "error" if issue.severity is Severity.ERROR else "warning"
    properties: dict[str, str | int | None] = {
        "file": issue.file or None,
        "line": issue.line,
        "col": issue.column,
    }
    return format_command(command, annotation_message(tool, issue), properties)


def iter_annotations(results: Sequence[ToolResult]) -> Iterator[str]:
    """Yield one annotation per issue, in tool then discovery order."""

    for result in results:
        for issue in result.issues:
            yield format_annotation(result.tool, issue)


def emit_annotations(results: Sequence[ToolResult], console: Console) -> int:
    """Print an annotation for every issue.

    Args:
        results: Tool results to annotate.
        console: Console receiving the workflow commands.

    Returns:
        int: Number of annotations emitted.
    """

    count = 0
    for line in iter_annotations(results):
        console.out(line, highlight=False)
        count += 1
    return count


__all__ = [
    "annotation_message",
    "emit_annotations",
    "format_annotation",
    "iter_annotations",
]
