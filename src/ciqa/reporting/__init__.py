# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting: annotations, summaries, JSON report and step outputs."""

from __future__ import annotations

from .annotations import emit_annotations, format_annotation
from .github import GitHubReporter
from .report import RunStatus, build_report, render_report, write_json_report, write_step_outputs
from .summary import build_summary_table, render_markdown_summary

__all__ = [
    "GitHubReporter",
    "RunStatus",
    "build_report",
    "build_summary_table",
    "emit_annotations",
    "format_annotation",
    "render_markdown_summary",
    "render_report",
    "write_json_report",
    "write_step_outputs",
]
