# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models, severity scale and logging shared across ciqa."""

from __future__ import annotations

from .models import Issue, JsonValue, RunnerConfig, ToolResult, total_issue_count
from .severity import Severity

__all__ = [
    "Issue",
    "JsonValue",
    "RunnerConfig",
    "Severity",
    "ToolResult",
    "total_issue_count",
]
