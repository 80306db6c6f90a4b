# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from rich.console import Console

from ciqa.core.logging import ActionLogger
from ciqa.testing import FakeExecutor, MemoryCacheBackend


@pytest.fixture
def console() -> Console:
    """Return a plain, wide console writing to memory."""

    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False, emoji=False)


@pytest.fixture
def logger(console: Console) -> ActionLogger:
    """Return a logger bound to the in-memory console, outside CI."""

    return ActionLogger(console=console, use_emoji=False, use_color=False, debug_enabled=True, github=False)


@pytest.fixture
def github_logger(console: Console) -> ActionLogger:
    """Return a logger emitting GitHub workflow commands."""

    return ActionLogger(console=console, use_emoji=False, use_color=False, github=True)


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def memory_backend() -> MemoryCacheBackend:
    return MemoryCacheBackend()


def console_text(console: Console) -> str:
    file = console.file
    assert isinstance(file, io.StringIO)
    return file.getvalue()


@pytest.fixture
def read_console(console: Console) -> Callable[[], str]:
    """Return a callable yielding everything printed so far."""

    return lambda: console_text(console)


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Return a helper creating files below ``tmp_path``."""

    def _write(files: Mapping[str, str]) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write
