# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour, emoji and CI annotations."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cache
from typing import Final

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from ..runtime.workflow import format_command, is_github_actions

GITHUB_LOG_WIDTH: Final[int] = 160


def _stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def _shared_console(*, color: bool, emoji: bool, github: bool, tty: bool) -> Console:
    """Return the process-wide console for one combination of output settings.

    Job logs on GitHub Actions render ANSI styles although no terminal is
    attached, so there colour follows ``color`` alone and the width is fixed at
    :data:`GITHUB_LOG_WIDTH`. Elsewhere colour also requires a TTY.

    Args:
        color: Whether colour output was requested.
        emoji: Whether Rich should render emoji glyphs.
        github: Whether output goes to a GitHub Actions job log.
        tty: Whether stdout is a terminal.

    Returns:
        Console: Console configured for the combination.
    """

    if github:
        return Console(
            color_system="standard" if color else None,
            force_terminal=color,
            no_color=not color,
            emoji=emoji,
            width=GITHUB_LOG_WIDTH,
            soft_wrap=True,
        )
    enabled = color and tty
    return Console(
        color_system="auto" if enabled else None,
        force_terminal=tty,
        no_color=not enabled,
        emoji=emoji,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _resolve_console(console: Console | None, *, use_emoji: bool, use_color: bool | None) -> tuple[Console, bool]:
    tty = _stdout_is_tty()
    color_enabled = tty if use_color is None else use_color
    if console is not None:
        return console, color_enabled
    return _shared_console(color=color_enabled, emoji=use_emoji, github=False, tty=tty), color_enabled


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
        console: Optional console overriding the shared console.
    """

    target, color_enabled = _resolve_console(console, use_emoji=use_emoji, use_color=use_color)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    target.print(text)


def section(title: str, *, use_color: bool, console: Console | None = None) -> None:
    """Render a section header to delineate console output blocks."""

    target, _ = _resolve_console(console, use_emoji=True, use_color=use_color)
    if use_color:
        target.print()
        target.print(Rule(title))
    else:
        target.print(Text(f"\n--- {title} ---"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color, console=console)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color, console=console)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color, console=console)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color, console=console)


@dataclass(slots=True)
class ActionLogger:
    """Adapter around the logging helpers aware of the CI host.

    Under GitHub Actions warnings and errors are emitted as workflow commands
    so they surface as annotations, debug lines go through ``::debug::`` and
    groups collapse in the job log.
    """

    console: Console
    use_emoji: bool = True
    use_color: bool | None = None
    debug_enabled: bool = False
    github: bool = False

    def _command(self, command: str, message: str) -> None:
        self.console.out(format_command(command, message), highlight=False)

    def info(self, message: str) -> None:
        """Log an informational message."""

        info(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def ok(self, message: str) -> None:
        """Log a success message."""

        ok(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def warn(self, message: str) -> None:
        """Log a warning, as a workflow annotation when running in CI."""

        if self.github:
            self._command("warning", message)
            return
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def error(self, message: str) -> None:
        """Log an error, as a workflow annotation when running in CI."""

        if self.github:
            self._command("error", message)
            return
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled."""

        if self.github:
            self._command("debug", message)
            return
        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Wrap output emitted inside the block into a collapsible group."""

        if self.github:
            self.console.out(f"::group::{title}", highlight=False)
        else:
            section(title, use_color=bool(self.use_color), console=self.console)
        try:
            yield
        finally:
            if self.github:
                self.console.out("::endgroup::", highlight=False)


def build_logger(
    *,
    emoji: bool = True,
    debug: bool = False,
    no_color: bool = False,
    github: bool | None = None,
    console: Console | None = None,
) -> ActionLogger:
    """Construct an :class:`ActionLogger` honouring the presentation flags.

    Args:
        emoji: Whether emoji prefixes are rendered.
        debug: Whether debug lines are printed outside CI.
        no_color: Disable colour output.
        github: Force or disable workflow commands; ``None`` detects the host.
        console: Optional console used instead of the shared one.

    Returns:
        ActionLogger: Configured logger.
    """

    in_github = is_github_actions() if github is None else github
    tty = _stdout_is_tty()
    use_color: bool | None
    if no_color:
        use_color = False
    elif in_github:
        use_color = True
    else:
        use_color = None
    color_enabled = tty if use_color is None else use_color
    target = console or _shared_console(color=color_enabled, emoji=emoji, github=in_github, tty=tty)
    return ActionLogger(
        console=target,
        use_emoji=emoji,
        use_color=use_color,
        debug_enabled=debug,
        github=in_github,
    )


__all__ = [
    "GITHUB_LOG_WIDTH",
    "ActionLogger",
    "build_logger",
    "emoji",
    "fail",
    "info",
    "ok",
    "section",
    "warn",
]
