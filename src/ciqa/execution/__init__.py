# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool selection and run orchestration."""

from __future__ import annotations

from .orchestrator import Orchestrator, OrchestratorDeps, RunOutcome
from .selection import ToolSelection, select_tools

__all__ = ["Orchestrator", "OrchestratorDeps", "RunOutcome", "ToolSelection", "select_tools"]
