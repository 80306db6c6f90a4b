# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool runners, availability checks and the tool registry."""

from __future__ import annotations

from .availability import check_tool_availability, log_tool_not_found
from .registry import TOOL_SPECS, ToolSpec, get_tool_spec, iter_default_tools
from .runners import RUNNERS, ToolRunner

__all__ = [
    "RUNNERS",
    "TOOL_SPECS",
    "ToolRunner",
    "ToolSpec",
    "check_tool_availability",
    "get_tool_spec",
    "iter_default_tools",
    "log_tool_not_found",
]
