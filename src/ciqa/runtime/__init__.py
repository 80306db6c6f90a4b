# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime services: process execution and CI host access."""

from __future__ import annotations

from .process import CommandExecutor, CommandResult, execute_command

__all__ = ["CommandExecutor", "CommandResult", "execute_command"]
