# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate the ``tools`` input into registry entries."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import ALL_TOOLS_SENTINEL
from ..tools.registry import ToolSpec, get_tool_spec, iter_default_tools


@dataclass(frozen=True, slots=True)
class ToolSelection:
    """Tools chosen for a run plus the names that matched nothing."""

    tools: tuple[ToolSpec, ...]
    unknown: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        """Return the selected tool identifiers in run order."""

        return tuple(spec.name for spec in self.tools)


def select_tools(raw: str | None) -> ToolSelection:
    """Resolve a comma separated tool list.

    ``all`` (or an empty value) selects every tool except the opt-in ones.
    Explicit names are lower-cased and trimmed, keep their order and are
    de-duplicated; names unknown to the registry are reported separately.

    Args:
        raw: Value of the ``tools`` input.

    Returns:
        ToolSelection: Selected tools and unknown names.
    """

    text = (raw or "").strip().lower()
    if not text or text == ALL_TOOLS_SENTINEL:
        return ToolSelection(tools=tuple(iter_default_tools()))
    selected: list[ToolSpec] = []
    unknown: list[str] = []
    seen: set[str] = set()
    for part in text.split(","):
        name = part.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        spec = get_tool_spec(name)
        if spec is None:
            unknown.append(name)
        else:
            selected.append(spec)
    return ToolSelection(tools=tuple(selected), unknown=tuple(unknown))


__all__ = ["ToolSelection", "select_tools"]
