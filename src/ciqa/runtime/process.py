# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; this module is the controlled wrapper
# around external tool execution and never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

TIMEOUT_EXIT_CODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Return stdout followed by stderr, as preserved for debugging."""

        return self.stdout + self.stderr

    @property
    def ok(self) -> bool:
        """Return ``True`` when the command exited with status ``0``."""

        return self.exit_code == 0


class CommandExecutor(Protocol):
    """Callable contract used by runners, availability checks and the cache manager."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> CommandResult:
        """Execute ``args`` inside ``cwd`` and capture the result."""
        ...


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text when supplied as ``bytes``.

    Args:
        value: Stream output captured from subprocess execution.

    Returns:
        str: Text output, empty when nothing was captured.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


def _normalize_args(args: Sequence[str], cwd: Path) -> list[str]:
    """Normalise the subprocess argument sequence.

    Executables given with a directory component (``vendor/bin/phpstan``)
    resolve against ``cwd``; bare names resolve through ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.
        cwd: Working directory the command will run in.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be located.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute() or os.sep in head or (os.altsep and os.altsep in head):
        candidate = head_path if head_path.is_absolute() else cwd / head_path
        resolved = shutil.which(str(candidate))
    else:
        resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def execute_command(
    args: Sequence[str],
    *,
    cwd: Path,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Execute ``args`` and capture its output without raising on failure.

    A non-zero exit status is reported through :attr:`CommandResult.exit_code`.
    When ``timeout`` elapses the process is killed and the result carries exit
    code ``124`` with a note appended to stderr. Output is decoded as UTF-8
    with undecodable bytes replaced.

    Args:
        args: Command and argument sequence to execute.
        cwd: Working directory for the process.
        timeout: Optional limit in seconds.
        env: Optional environment replacing the inherited one.

    Returns:
        CommandResult: Exit code and trimmed output streams.

    Raises:
        FileNotFoundError: If the executable cannot be located.
        ValueError: If ``args`` is empty.
    """

    normalized = _normalize_args(args, cwd)
    try:
        completed = subprocess.run(  # nosec B603 - argument list, no shell expansion
            normalized,
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr).strip()
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        return CommandResult(
            exit_code=TIMEOUT_EXIT_CODE,
            stdout=_ensure_text(exc.stdout).strip(),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    return CommandResult(
        exit_code=completed.returncode,
        stdout=_ensure_text(completed.stdout).strip(),
        stderr=_ensure_text(completed.stderr).strip(),
    )


__all__ = [
    "TIMEOUT_EXIT_CODE",
    "CommandExecutor",
    "CommandResult",
    "execute_command",
]
