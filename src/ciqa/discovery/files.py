# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Glob-based file discovery relative to a working directory."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({".git", "node_modules", "vendor"})
_NEGATION_PREFIX: Final[str] = "!"
_COMMENT_PREFIX: Final[str] = "#"
_BRACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{([^{}]*)\}")
_WILDCARD_CHARS: Final[frozenset[str]] = frozenset("*?[")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives in ``pattern``.

    Nested groups are expanded innermost first; a group without a comma is
    kept literally.

    Args:
        pattern: Glob pattern possibly containing brace groups.

    Returns:
        list[str]: Expanded patterns in declaration order.
    """

    match = _BRACE_PATTERN.search(pattern)
    if match is None or "," not in match.group(1):
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a POSIX glob into a regular expression.

    ``**`` spans directories, ``*`` and ``?`` stay within one path segment and
    a pattern naming a directory also matches everything below it.

    Args:
        pattern: Brace-free glob relative to the working directory.

    Returns:
        re.Pattern[str]: Compiled expression matching relative POSIX paths.
    """

    parts: list[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            closing = pattern.find("]", index + 1)
            if closing == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[index + 1 : closing]
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                index = closing
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile(f"^{''.join(parts)}(?:/.*)?$")


@dataclass(frozen=True, slots=True)
class GlobSet:
    """Include and exclude patterns parsed from a newline separated pattern list."""

    includes: tuple[str, ...]
    excludes: tuple[str, ...]

    def matches(self, relative: str) -> bool:
        """Return ``True`` when ``relative`` is included and not excluded."""

        if not any(compile_glob(pattern).match(relative) for pattern in self.includes):
            return False
        return not any(compile_glob(pattern).match(relative) for pattern in self.excludes)

    def names_directory(self, directory: str) -> bool:
        """Return ``True`` when an include pattern spells out ``directory`` as its leading path.

        ``vendor/acme/**/*.php`` names ``vendor`` and ``vendor/acme``; a
        ``**/*.php`` pattern names nothing.
        """

        for pattern in self.includes:
            prefix = _literal_prefix(pattern)
            if prefix == directory or prefix.startswith(f"{directory}/"):
                return True
        return False


def _literal_prefix(pattern: str) -> str:
    segments: list[str] = []
    for segment in pattern.split("/"):
        if _WILDCARD_CHARS.intersection(segment):
            break
        segments.append(segment)
    return "/".join(segments)


def _normalise_pattern(raw: str, root: Path) -> str:
    pattern = raw.strip().replace("\\", "/")
    if Path(pattern).is_absolute():
        try:
            pattern = Path(pattern).relative_to(root).as_posix()
        except ValueError:
            return pattern
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/") or "."


def parse_patterns(patterns: str | Sequence[str], root: Path) -> GlobSet:
    """Parse newline separated patterns into a :class:`GlobSet`.

    Blank lines and ``#`` comments are ignored; ``!`` marks an exclusion.

    Args:
        patterns: Pattern text or a sequence of patterns.
        root: Working directory patterns are relative to.

    Returns:
        GlobSet: Expanded include and exclude patterns.
    """

    raw_lines: Iterable[str] = patterns.splitlines() if isinstance(patterns, str) else patterns
    includes: list[str] = []
    excludes: list[str] = []
    for raw in raw_lines:
        line = raw.strip()
        if not line or line.startswith(_COMMENT_PREFIX):
            continue
        target = includes
        if line.startswith(_NEGATION_PREFIX):
            target = excludes
            line = line[len(_NEGATION_PREFIX) :].strip()
        for expanded in expand_braces(line):
            normalised = _normalise_pattern(expanded, root)
            target.append("**" if normalised == "." else normalised)
    return GlobSet(includes=tuple(includes), excludes=tuple(excludes))


def _walk_files(root: Path, globs: GlobSet) -> Iterator[str]:
    """Yield relative POSIX paths of regular files below ``root``.

    Directories in :data:`ALWAYS_EXCLUDE_DIRS` are pruned unless an include
    pattern of ``globs`` names them explicitly.
    """

    for current, dirnames, filenames in os.walk(root, followlinks=False):
        base = Path(current)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in ALWAYS_EXCLUDE_DIRS or globs.names_directory((base / name).relative_to(root).as_posix())
        )
        for name in filenames:
            candidate = base / name
            if candidate.is_symlink() or not candidate.is_file():
                continue
            yield candidate.relative_to(root).as_posix()


def find_files(patterns: str | Sequence[str], working_directory: Path) -> list[str]:
    """Expand glob ``patterns`` into files relative to ``working_directory``.

    Args:
        patterns: Newline separated glob patterns or a sequence of patterns.
        working_directory: Directory the patterns and results are relative to.

    Returns:
        list[str]: Sorted relative POSIX paths of matching files.
    """

    root = working_directory.resolve()
    if not root.is_dir():
        return []
    globs = parse_patterns(patterns, root)
    if not globs.includes:
        return []
    return sorted(path for path in _walk_files(root, globs) if globs.matches(path))


__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "GlobSet",
    "compile_glob",
    "expand_braces",
    "find_files",
    "parse_patterns",
]
