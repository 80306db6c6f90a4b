# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File discovery helpers."""

from __future__ import annotations

from .files import ALWAYS_EXCLUDE_DIRS, expand_braces, find_files

__all__ = ["ALWAYS_EXCLUDE_DIRS", "expand_braces", "find_files"]
