# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporter publishing tool results to GitHub Actions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..core.logging import ActionLogger
from ..core.models import ToolResult, total_issue_count
from ..runtime.workflow import append_step_summary
from .annotations import emit_annotations
from .report import render_report
from .summary import build_summary_table, log_breakdown, render_markdown_summary


class GitHubReporter:
    """Publish annotations, a summary and the JSON report for a run.

    Args:
        results: Tool results in execution order.
        logger: Logger whose console receives the output.
    """

    def __init__(self, results: Sequence[ToolResult], logger: ActionLogger) -> None:
        self._results = tuple(results)
        self._logger = logger

    @property
    def results(self) -> tuple[ToolResult, ...]:
        """Return the reported results."""

        return self._results

    @property
    def total_issues(self) -> int:
        """Return the number of issues across all results."""

        return total_issue_count(self._results)

    def generate_annotations(self) -> int:
        """Emit one annotation per issue and return how many were written."""

        return emit_annotations(self._results, self._logger.console)

    def generate_summary(self, summary_path: Path | None = None) -> None:
        """Print the summary table and breakdown, and append the job summary.

        Args:
            summary_path: Job summary file; skipped when ``None``.
        """

        color = self._logger.use_color is not False
        self._logger.console.print(build_summary_table(self._results, color=color))
        log_breakdown(self._results, self._logger)
        if summary_path is not None:
            append_step_summary(summary_path, render_markdown_summary(self._results))

    def get_report(self) -> str:
        """Return the JSON report text."""

        return render_report(self._results)


__all__ = ["GitHubReporter"]
