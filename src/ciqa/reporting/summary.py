# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Human readable run summaries for the console and the job summary page."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Final

from rich import box
from rich.table import Table
from rich.text import Text

from ..core.logging import ActionLogger
from ..core.models import ToolResult, total_issue_count

SUMMARY_HEADING: Final[str] = "Code Quality Report"
PASS_LABEL: Final[str] = "PASS"
FAIL_LABEL: Final[str] = "FAIL"


def status_label(result: ToolResult) -> str:
    """Return ``PASS`` or ``FAIL`` for the exit status of ``result``."""

    return PASS_LABEL if result.success else FAIL_LABEL


def build_summary_table(results: Sequence[ToolResult], *, color: bool = True) -> Table:
    """Create a Rich table with one row per tool and a totals row.

    Args:
        results: Tool results in execution order.
        color: Whether the status column is styled.

    Returns:
        Table: Table with Tool, Status and Issues columns.
    """

    table = Table(title=SUMMARY_HEADING, box=box.SIMPLE_HEAD, expand=False)
    table.add_column("Tool", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("Issues", justify="right")
    for result in results:
        style = ("green" if result.success else "red") if color else None
        table.add_row(result.tool, Text(status_label(result), style=style or ""), str(result.issue_count))
    table.add_section()
    table.add_row("", Text("Total", style="bold" if color else ""), str(total_issue_count(results)))
    return table


def render_markdown_summary(results: Sequence[ToolResult]) -> str:
    """Render the job summary as a Markdown heading and table."""

    lines = [
        f"# {SUMMARY_HEADING}",
        "",
        "| Tool | Status | Issues |",
        "| --- | --- | ---: |",
    ]
    for result in results:
        lines.append(f"| {_escape_cell(result.tool)} | {status_label(result)} | {result.issue_count} |")
    lines.append(f"|  | **Total** | **{total_issue_count(results)}** |")
    return "\n".join(lines) + "\n"


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def issues_by_file(result: ToolResult) -> Counter[str]:
    """Count the issues of ``result`` per file, preserving first-seen order."""

    return Counter(issue.file for issue in result.issues)


def log_breakdown(results: Sequence[ToolResult], logger: ActionLogger) -> None:
    """Log per-tool error and warning counts with per-file totals.

    Args:
        results: Tool results in execution order.
        logger: Logger receiving the breakdown.
    """

    total = total_issue_count(results)
    if total == 0:
        logger.ok("No code quality issues found!")
        return
    logger.info(f"Found {total} code quality issues across all tools")
    for result in results:
        if not result.issues:
            continue
        with logger.group(f"{result.tool}: {result.issue_count} issues"):
            logger.info(f"Errors: {result.error_count}, Warnings: {result.warning_count}")
            for path, count in issues_by_file(result).items():
                logger.info(f"  {path}: {count} issue(s)")


__all__ = [
    "SUMMARY_HEADING",
    "build_summary_table",
    "issues_by_file",
    "log_breakdown",
    "render_markdown_summary",
    "status_label",
]
