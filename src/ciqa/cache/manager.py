# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restore and save dependency caches around a lint run."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..config.models import CacheSettings
from ..core.logging import ActionLogger
from ..runtime.process import CommandExecutor, execute_command
from .backend import CacheBackend, CacheError
from .keys import CacheKeyInfo, composer_cache_key, node_cache_key
from .state import CacheState, Ecosystem, EcosystemCacheState

COMPOSER_CACHE_DIR_COMMAND: Final[tuple[str, ...]] = ("composer", "config", "cache-files-dir")
# Tried in order; the first command printing a directory wins.
JS_CACHE_DIR_COMMANDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("npm", ("npm", "config", "get", "cache")),
    ("Yarn", ("yarn", "cache", "dir")),
    ("pnpm", ("pnpm", "store", "path")),
)
_LABELS: Final[dict[Ecosystem, str]] = {"composer": "Composer", "npm": "npm"}


class CacheManager:
    """Derive cache keys and drive a :class:`CacheBackend`.

    Restore returns a :class:`CacheState` that must be handed to :meth:`save`;
    save skips ecosystems that hit on restore. Neither phase ever raises:
    failures are logged as warnings and the run continues.
    """

    def __init__(
        self,
        settings: CacheSettings,
        working_directory: Path,
        backend: CacheBackend,
        logger: ActionLogger,
        *,
        executor: CommandExecutor = execute_command,
        platform: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._settings = settings
        self._working_directory = working_directory.absolute()
        self._backend = backend
        self._logger = logger
        self._executor = executor
        self._platform = platform
        self._timeout = timeout

    def restore(self) -> CacheState:
        """Restore every configured ecosystem cache.

        Returns:
            CacheState: Hit flag and primary key per restored ecosystem.
        """

        if not self._settings.enabled:
            self._logger.debug("Cache is disabled")
            return CacheState()
        state = CacheState()
        with self._logger.group("Restoring cache"):
            try:
                for ecosystem, info in self._key_infos():
                    entry = self._restore_one(ecosystem, info)
                    if entry is not None:
                        state = state.with_entry(ecosystem, entry)
                self._logger.info("Cache restoration completed")
            except (CacheError, OSError, ValueError) as exc:
                self._logger.warn(f"Failed to restore cache: {exc}")
        return state

    def save(self, state: CacheState) -> None:
        """Save the caches that missed on restore.

        Args:
            state: State returned by :meth:`restore`.
        """

        if not self._settings.enabled:
            return
        with self._logger.group("Saving cache"):
            try:
                for ecosystem, info in self._key_infos():
                    self._save_one(ecosystem, info, state.get(ecosystem))
                self._logger.info("Cache saving completed")
            except (OSError, ValueError) as exc:
                self._logger.warn(f"Failed to save cache: {exc}")

    def _key_infos(self) -> list[tuple[Ecosystem, CacheKeyInfo]]:
        prefix = self._settings.key_prefix
        return [
            (
                "composer",
                composer_cache_key(
                    self._working_directory,
                    prefix=prefix,
                    cache_dir=self._detect_composer_cache_dir() if self._settings.composer_cache else None,
                    include_vendor=self._settings.composer_vendor,
                    platform=self._platform,
                ),
            ),
            (
                "npm",
                node_cache_key(
                    self._working_directory,
                    prefix=prefix,
                    cache_dir=self._detect_js_cache_dir() if self._settings.npm_cache else None,
                    include_node_modules=self._settings.node_modules,
                    platform=self._platform,
                ),
            ),
        ]

    def _restore_one(self, ecosystem: Ecosystem, info: CacheKeyInfo) -> EcosystemCacheState | None:
        label = _LABELS[ecosystem]
        if not info.paths:
            self._logger.debug(f"No {label} cache paths configured")
            return None
        self._logger.info(f"{label} cache key: {info.key}")
        self._logger.debug(f"{label} cache paths: {_join(info.paths)}")
        matched = self._backend.restore(info.paths, info.key, info.restore_keys)
        if matched:
            self._logger.info(f"{label} cache restored from key: {matched}")
            return EcosystemCacheState(hit=True, key=info.key)
        self._logger.info(f"{label} cache not found")
        return EcosystemCacheState(hit=False, key=info.key)

    def _save_one(self, ecosystem: Ecosystem, info: CacheKeyInfo, entry: EcosystemCacheState) -> None:
        label = _LABELS[ecosystem]
        if entry.hit:
            self._logger.debug(f"{label} cache hit occurred, skipping save")
            return
        if not entry.key:
            self._logger.debug(f"No {label} cache key found, skipping save")
            return
        existing = [path for path in info.paths if path.exists()]
        if not existing:
            self._logger.debug(f"No {label} cache paths exist to save")
            return
        self._logger.info(f"Saving {label} cache with key: {entry.key}")
        self._logger.debug(f"{label} cache paths: {_join(existing)}")
        try:
            stored = self._backend.save(existing, entry.key)
        except CacheError as exc:
            self._logger.warn(f"Failed to save {label} cache: {exc}")
            return
        if stored:
            self._logger.info(f"{label} cache saved successfully")
        else:
            self._logger.info(f"{label} cache entry {entry.key} already exists, skipping save")

    def _query_directory(self, command: Sequence[str]) -> Path | None:
        try:
            result = self._executor(command, cwd=self._working_directory, timeout=self._timeout)
        except (OSError, ValueError):
            return None
        if result.ok and result.stdout.strip():
            return Path(result.stdout.strip())
        return None

    def _detect_composer_cache_dir(self) -> Path | None:
        directory = self._query_directory(COMPOSER_CACHE_DIR_COMMAND)
        if directory is None:
            self._logger.debug("Could not detect Composer cache directory")
        else:
            self._logger.debug(f"Composer cache directory: {directory}")
        return directory

    def _detect_js_cache_dir(self) -> Path | None:
        for label, command in JS_CACHE_DIR_COMMANDS:
            directory = self._query_directory(command)
            if directory is not None:
                self._logger.debug(f"{label} cache directory: {directory}")
                return directory
        self._logger.debug("Could not detect npm/yarn/pnpm cache directory")
        return None


def _join(paths: Sequence[Path]) -> str:
    return ", ".join(str(path) for path in paths)


__all__ = [
    "COMPOSER_CACHE_DIR_COMMAND",
    "JS_CACHE_DIR_COMMANDS",
    "CacheManager",
]
