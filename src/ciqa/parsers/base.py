# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol, cast

from ..core.models import Issue, JsonValue, RunnerConfig
from ..runtime.process import CommandResult

JsonTransform = Callable[[JsonValue, RunnerConfig], Sequence[Issue]]
TextTransform = Callable[[Sequence[str], RunnerConfig], Sequence[Issue]]
ResultTransform = Callable[[CommandResult, RunnerConfig], Sequence[Issue]]


class OutputParseError(ValueError):
    """Raised when tool output does not match the format a parser expects."""


class Parser(Protocol):
    """Strategy converting a captured command result into issues."""

    def parse(self, result: CommandResult, config: RunnerConfig) -> Sequence[Issue]:
        """Return the issues found in ``result``.

        Raises:
            OutputParseError: If the output cannot be interpreted.
        """
        ...


def load_json(stdout: str) -> JsonValue:
    """Decode ``stdout`` as a single JSON document.

    Args:
        stdout: Captured standard output.

    Returns:
        JsonValue: Decoded payload.

    Raises:
        OutputParseError: If ``stdout`` is not valid JSON.
    """

    try:
        return cast(JsonValue, json.loads(stdout))
    except json.JSONDecodeError as exc:
        raise OutputParseError(str(exc)) from exc


def iter_pattern_matches(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    *,
    skip_blank: bool = True,
) -> Iterator[tuple[str, re.Match[str] | None]]:
    """Yield each stripped line together with its ``pattern`` match.

    Args:
        lines: Sequence of raw lines emitted by a tool.
        pattern: Compiled regular expression used to match diagnostic lines.
        skip_blank: When ``True`` blank lines are ignored.

    Yields:
        tuple[str, re.Match[str] | None]: The line and its match, if any.
    """

    for raw_line in lines:
        line = raw_line.strip()
        if skip_blank and not line:
            continue
        yield line, pattern.match(line)


@dataclass(frozen=True, slots=True)
class JsonParser:
    """Parse stdout as JSON and delegate to a transform function.

    Blank stdout yields no issues; invalid JSON raises :class:`OutputParseError`.
    """

    transform: JsonTransform

    def parse(self, result: CommandResult, config: RunnerConfig) -> Sequence[Issue]:
        if not result.stdout.strip():
            return []
        return self.transform(load_json(result.stdout), config)


@dataclass(frozen=True, slots=True)
class TextParser:
    """Parse the captured output line by line."""

    transform: TextTransform
    include_stderr: bool = False

    def parse(self, result: CommandResult, config: RunnerConfig) -> Sequence[Issue]:
        streams = (result.stdout, result.stderr) if self.include_stderr else (result.stdout,)
        text = "\n".join(stream for stream in streams if stream)
        return self.transform(text.splitlines(), config)


@dataclass(frozen=True, slots=True)
class ResultParser:
    """Hand the whole command result to a transform (exit code included)."""

    transform: ResultTransform

    def parse(self, result: CommandResult, config: RunnerConfig) -> Sequence[Issue]:
        return self.transform(result, config)


@dataclass(frozen=True, slots=True)
class ParseChain:
    """Try parsing strategies in order; the first one that succeeds wins.

    Later strategies are degraded fallbacks, consulted only when every
    earlier strategy raised :class:`OutputParseError`.
    """

    strategies: tuple[Parser, ...]

    def parse(
        self,
        result: CommandResult,
        config: RunnerConfig,
        *,
        on_failure: Callable[[str], None] | None = None,
    ) -> Sequence[Issue]:
        """Return issues from the first strategy able to parse ``result``.

        Args:
            result: Captured command result.
            config: Runner configuration of the invocation.
            on_failure: Optional callback receiving each strategy failure.

        Returns:
            Sequence[Issue]: Issues produced by the winning strategy.

        Raises:
            OutputParseError: If every strategy failed.
        """

        failures: list[str] = []
        for strategy in self.strategies:
            try:
                return strategy.parse(result, config)
            except OutputParseError as exc:
                failures.append(str(exc))
                if on_failure is not None:
                    on_failure(str(exc))
        raise OutputParseError("; ".join(failures) or "no parser configured")


__all__ = [
    "JsonParser",
    "JsonTransform",
    "OutputParseError",
    "ParseChain",
    "Parser",
    "ResultParser",
    "ResultTransform",
    "TextParser",
    "TextTransform",
    "iter_pattern_matches",
    "load_json",
]
