# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for annotations, summaries and the JSON report."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from rich.console import Console

from ciqa.core.logging import ActionLogger
from ciqa.core.models import Issue, ToolResult
from ciqa.core.severity import Severity
from ciqa.reporting import (
    GitHubReporter,
    build_report,
    build_summary_table,
    format_annotation,
    render_markdown_summary,
    write_json_report,
    write_step_outputs,
)


def _results() -> list[ToolResult]:
    return [
        ToolResult(
            tool="PHPStan",
            success=False,
            issues=[
                Issue(file="src/A.php", line=3, severity=Severity.ERROR, message="Bad call", rule="method.notFound"),
                Issue(file="src/A.php", line=9, severity=Severity.ERROR, message="Bad type"),
            ],
        ),
        ToolResult(
            tool="ESLint",
            success=True,
            issues=[Issue(file="web/app.js", line=2, column=5, severity=Severity.WARNING, message="semi")],
        ),
        ToolResult(tool="Stylelint", success=True),
    ]


def test_format_annotation() -> None:
    issue = Issue(file="src/A.php", line=3, column=7, severity=Severity.ERROR, message="Oops", rule="R1")
    assert format_annotation("PHPStan", issue) == "::error file=src/A.php,line=3,col=7::[PHPStan - R1] Oops"

    warning = Issue(file="a.css", severity=Severity.WARNING, message="w")
    assert format_annotation("Stylelint", warning) == "::warning file=a.css,line=1::[Stylelint] w"


def test_format_annotation_escapes_values() -> None:
    issue = Issue(file="C:/a,b.php", severity=Severity.WARNING, message="100% done\nnext")
    assert format_annotation("X", issue) == "::warning file=C%3A/a%2Cb.php,line=1::[X] 100%25 done%0Anext"


def test_format_annotation_without_file() -> None:
    issue = Issue(file="", severity=Severity.ERROR, message="global")
    assert format_annotation("PHPMD", issue) == "::error line=1::[PHPMD] global"


def test_annotation_count_matches_report_total(
    github_logger: ActionLogger,
    read_console: Callable[[], str],
) -> None:
    results = _results()
    reporter = GitHubReporter(results, github_logger)

    count = reporter.generate_annotations()
    report = json.loads(reporter.get_report())

    assert count == reporter.total_issues == report["totalIssues"] == 3
    lines = [line for line in read_console().splitlines() if line.startswith(("::error ", "::warning "))]
    assert len(lines) == 3


def test_build_report_shape() -> None:
    report = build_report(_results())
    assert report["totalIssues"] == 3
    results = report["results"]
    assert isinstance(results, list)
    assert [entry["tool"] for entry in results] == ["PHPStan", "ESLint", "Stylelint"]  # type: ignore[index]
    assert results[0]["errors"] == 2  # type: ignore[index]


def test_render_markdown_summary() -> None:
    markdown = render_markdown_summary(_results())
    lines = markdown.splitlines()
    assert lines[0] == "# Code Quality Report"
    assert "| PHPStan | FAIL | 2 |" in lines
    assert "| ESLint | PASS | 1 |" in lines
    assert "| Stylelint | PASS | 0 |" in lines
    assert lines[-1] == "|  | **Total** | **3** |"


def test_summary_table_has_row_per_tool() -> None:
    console = Console(width=120, color_system=None, record=True)
    console.print(build_summary_table(_results(), color=False))
    text = console.export_text()
    assert "Code Quality Report" in text
    assert "FAIL" in text
    assert "Total" in text
    assert build_summary_table(_results()).row_count == 4


def test_generate_summary_appends_job_summary(
    tmp_path: Path,
    logger: ActionLogger,
    read_console: Callable[[], str],
) -> None:
    summary = tmp_path / "summary.md"
    summary.write_text("existing\n", encoding="utf-8")

    GitHubReporter(_results(), logger).generate_summary(summary)

    content = summary.read_text(encoding="utf-8")
    assert content.startswith("existing\n# Code Quality Report")
    output = read_console()
    assert "Found 3 code quality issues across all tools" in output
    assert "Errors: 2, Warnings: 0" in output
    assert "src/A.php: 2 issue(s)" in output


def test_generate_summary_without_issues(logger: ActionLogger, read_console: Callable[[], str]) -> None:
    GitHubReporter([ToolResult(tool="PHPMD", success=True)], logger).generate_summary()
    assert "No code quality issues found!" in read_console()


def test_write_step_outputs(tmp_path: Path) -> None:
    output = tmp_path / "github_output"
    report = json.dumps(build_report(_results()), indent=2)

    write_step_outputs(output, total_issues=3, status="failed", report=report)

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "total-issues=3"
    assert lines[1] == "status=failed"
    assert lines[2].startswith("report<<ghadelimiter_")
    delimiter = lines[2].split("<<", 1)[1]
    assert lines[-1] == delimiter
    assert json.loads("\n".join(lines[3:-1])) == build_report(_results())


def test_write_json_report(tmp_path: Path) -> None:
    target = tmp_path / "out" / "report.json"
    write_json_report(_results(), target)
    assert json.loads(target.read_text(encoding="utf-8"))["totalIssues"] == 3
