# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Testing helpers for ciqa internals."""

from .fakes import FakeExecutor, MemoryCacheBackend

__all__ = ["FakeExecutor", "MemoryCacheBackend"]
