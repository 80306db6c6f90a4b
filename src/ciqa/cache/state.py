# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hit/key state handed from cache restore to cache save."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Final, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .backend import CacheError

Ecosystem: TypeAlias = Literal["composer", "npm"]

ECOSYSTEMS: Final[tuple[Ecosystem, ...]] = ("composer", "npm")
_TRUE: Final[str] = "true"
_FALSE: Final[str] = "false"


def hit_state_key(ecosystem: Ecosystem) -> str:
    """Return the state entry recording whether ``ecosystem`` had a cache hit."""

    return f"{ecosystem}-cache-hit"


def key_state_key(ecosystem: Ecosystem) -> str:
    """Return the state entry recording the primary key of ``ecosystem``."""

    return f"{ecosystem}-cache-key"


class EcosystemCacheState(BaseModel):
    """Restore outcome of a single ecosystem."""

    model_config = ConfigDict(frozen=True)

    hit: bool = False
    key: str | None = None


class CacheState(BaseModel):
    """Restore outcomes per ecosystem, consumed by the save phase.

    Ecosystems missing from :attr:`entries` were not restored (cache disabled
    or no paths configured) and are skipped when saving.
    """

    model_config = ConfigDict(frozen=True)

    entries: Mapping[Ecosystem, EcosystemCacheState] = Field(default_factory=dict)

    def get(self, ecosystem: Ecosystem) -> EcosystemCacheState:
        """Return the state recorded for ``ecosystem`` (empty when absent)."""

        return self.entries.get(ecosystem, EcosystemCacheState())

    def with_entry(self, ecosystem: Ecosystem, entry: EcosystemCacheState) -> CacheState:
        """Return a copy of the state with ``entry`` recorded for ``ecosystem``."""

        return CacheState(entries={**self.entries, ecosystem: entry})

    def to_state(self) -> dict[str, str]:
        """Flatten into ``{ecosystem}-cache-hit`` / ``{ecosystem}-cache-key`` strings."""

        flat: dict[str, str] = {}
        for ecosystem, entry in self.entries.items():
            flat[hit_state_key(ecosystem)] = _TRUE if entry.hit else _FALSE
            if entry.key:
                flat[key_state_key(ecosystem)] = entry.key
        return flat

    @classmethod
    def from_state(cls, values: Mapping[str, str]) -> CacheState:
        """Rebuild a state from the flattened representation.

        Args:
            values: Mapping produced by :meth:`to_state`.

        Returns:
            CacheState: Ecosystems with a recorded hit flag or key.
        """

        entries: dict[Ecosystem, EcosystemCacheState] = {}
        for ecosystem in ECOSYSTEMS:
            hit_value = values.get(hit_state_key(ecosystem))
            key_value = values.get(key_state_key(ecosystem)) or None
            if hit_value is None and key_value is None:
                continue
            entries[ecosystem] = EcosystemCacheState(
                hit=(hit_value or "").strip().lower() == _TRUE,
                key=key_value,
            )
        return cls(entries=entries)


def write_state_file(path: Path, state: CacheState) -> None:
    """Persist ``state`` as a JSON object of flattened entries.

    Raises:
        CacheError: If the file cannot be written.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state.to_state(), indent=2, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise CacheError(f"Unable to write cache state to {path}: {exc}") from exc


def read_state_file(path: Path) -> CacheState:
    """Load a state written by :func:`write_state_file`.

    A missing file yields an empty state.

    Raises:
        CacheError: If the file exists but cannot be decoded.
    """

    if not path.is_file():
        return CacheState()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CacheError(f"Unable to read cache state from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise CacheError(f"Cache state in {path} must be a JSON object")
    return CacheState.from_state({str(key): str(value) for key, value in payload.items()})


__all__ = [
    "ECOSYSTEMS",
    "CacheState",
    "Ecosystem",
    "EcosystemCacheState",
    "hit_state_key",
    "key_state_key",
    "read_state_file",
    "write_state_file",
]
