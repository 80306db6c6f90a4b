# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Machine-readable JSON report and CI step outputs."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Literal, TypeAlias

from ..core.models import JsonValue, ToolResult, total_issue_count
from ..core.serialization import serialize_result
from ..runtime.workflow import append_output

RunStatus: TypeAlias = Literal["success", "failed"]

TOTAL_ISSUES_OUTPUT: Final[str] = "total-issues"
STATUS_OUTPUT: Final[str] = "status"
REPORT_OUTPUT: Final[str] = "report"


def build_report(results: Sequence[ToolResult]) -> dict[str, JsonValue]:
    """Return the report payload ``{"totalIssues": ..., "results": [...]}``."""

    return {
        "totalIssues": total_issue_count(results),
        "results": [serialize_result(result) for result in results],
    }


def render_report(results: Sequence[ToolResult]) -> str:
    """Serialise the report payload as indented JSON."""

    return json.dumps(build_report(results), indent=2)


def write_json_report(results: Sequence[ToolResult], path: Path) -> None:
    """Write the JSON report to ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(results) + "\n", encoding="utf-8")


def write_step_outputs(path: Path, *, total_issues: int, status: RunStatus, report: str) -> None:
    """Append the ``total-issues``, ``status`` and ``report`` step outputs.

    Args:
        path: Output file announced through ``GITHUB_OUTPUT``.
        total_issues: Number of issues across all tools.
        status: Overall run status.
        report: JSON report text.
    """

    append_output(path, TOTAL_ISSUES_OUTPUT, str(total_issues))
    append_output(path, STATUS_OUTPUT, status)
    append_output(path, REPORT_OUTPUT, report)


__all__ = [
    "REPORT_OUTPUT",
    "STATUS_OUTPUT",
    "TOTAL_ISSUES_OUTPUT",
    "RunStatus",
    "build_report",
    "render_report",
    "write_json_report",
    "write_step_outputs",
]
