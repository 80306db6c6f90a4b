# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub Actions workflow command and environment-file helpers."""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Final

GITHUB_ACTIONS_ENV: Final[str] = "GITHUB_ACTIONS"
GITHUB_OUTPUT_ENV: Final[str] = "GITHUB_OUTPUT"
GITHUB_STEP_SUMMARY_ENV: Final[str] = "GITHUB_STEP_SUMMARY"

_DATA_ESCAPES: Final[tuple[tuple[str, str], ...]] = (
    ("%", "%25"),
    ("\r", "%0D"),
    ("\n", "%0A"),
)
_PROPERTY_ESCAPES: Final[tuple[tuple[str, str], ...]] = (
    *_DATA_ESCAPES,
    (":", "%3A"),
    (",", "%2C"),
)


def is_github_actions(env: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when running inside a GitHub Actions job."""

    source = os.environ if env is None else env
    return source.get(GITHUB_ACTIONS_ENV, "").strip().lower() == "true"


def escape_data(value: str) -> str:
    """Escape a workflow command message."""

    for raw, escaped in _DATA_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""

    for raw, escaped in _PROPERTY_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def format_command(
    command: str,
    message: str,
    properties: Mapping[str, str | int | None] | None = None,
) -> str:
    """Render a ``::command key=value::message`` workflow command.

    Properties whose value is ``None`` are dropped; the remaining ones keep
    their insertion order.

    Args:
        command: Workflow command name such as ``error`` or ``group``.
        message: Command payload.
        properties: Optional command properties.

    Returns:
        str: Workflow command line without a trailing newline.
    """

    rendered = ""
    if properties:
        pairs = [f"{key}={escape_property(str(value))}" for key, value in properties.items() if value is not None]
        if pairs:
            rendered = " " + ",".join(pairs)
    return f"::{command}{rendered}::{escape_data(message)}"


def resolve_env_file(name: str, explicit: Path | None = None) -> Path | None:
    """Return the environment file path for ``name`` when configured.

    Args:
        name: Environment variable naming the file (``GITHUB_OUTPUT`` ...).
        explicit: Caller-supplied path taking precedence over the environment.

    Returns:
        Path | None: File path or ``None`` when the host does not provide one.
    """

    if explicit is not None:
        return explicit
    raw = os.environ.get(name, "").strip()
    return Path(raw) if raw else None


def append_output(path: Path, name: str, value: str) -> None:
    """Append a step output to ``path`` using the environment-file syntax.

    Multi-line values are written with a random heredoc delimiter.

    Args:
        path: Output file announced through ``GITHUB_OUTPUT``.
        name: Output name.
        value: Output value.
    """

    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(entry)


def append_step_summary(path: Path, markdown: str) -> None:
    """Append Markdown to the job summary file."""

    with path.open("a", encoding="utf-8") as handle:
        handle.write(markdown if markdown.endswith("\n") else f"{markdown}\n")


__all__ = [
    "GITHUB_ACTIONS_ENV",
    "GITHUB_OUTPUT_ENV",
    "GITHUB_STEP_SUMMARY_ENV",
    "append_output",
    "append_step_summary",
    "escape_data",
    "escape_property",
    "format_command",
    "is_github_actions",
    "resolve_env_file",
]
