# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache key derivation from dependency lockfiles."""

from __future__ import annotations

import hashlib
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal, TypeAlias

JsPackageManager: TypeAlias = Literal["npm", "yarn", "pnpm"]

NO_LOCK_HASH: Final[str] = "no-lock"
HASH_LENGTH: Final[int] = 8
COMPOSER_MANAGER: Final[str] = "composer"
COMPOSER_LOCKFILE: Final[str] = "composer.lock"
VENDOR_DIR: Final[str] = "vendor"
NODE_MODULES_DIR: Final[str] = "node_modules"

# Checked in order; the first lockfile present decides the package manager.
JS_LOCKFILES: Final[tuple[tuple[str, JsPackageManager], ...]] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)
DEFAULT_JS_MANAGER: Final[JsPackageManager] = "npm"


@dataclass(frozen=True, slots=True)
class CacheKeyInfo:
    """Primary key, fallback prefixes and governed paths of one ecosystem cache.

    Attributes:
        key: Exact key identifying the cache entry.
        restore_keys: Fallback prefixes, most specific first.
        paths: Filesystem paths stored under the key.
    """

    key: str
    restore_keys: tuple[str, ...]
    paths: tuple[Path, ...]


def current_platform() -> str:
    """Return the platform label embedded in cache keys."""

    return sys.platform


def hash_lockfile(path: Path) -> str:
    """Return the first eight hex digits of the SHA-256 of ``path``.

    Args:
        path: Lockfile to hash.

    Returns:
        str: Hash prefix, or ``"no-lock"`` when the file does not exist.
    """

    if not path.is_file():
        return NO_LOCK_HASH
    return hashlib.sha256(path.read_bytes()).hexdigest()[:HASH_LENGTH]


def detect_js_lockfile(working_directory: Path) -> tuple[JsPackageManager, Path | None]:
    """Return the JS package manager and its lockfile, if any.

    ``pnpm-lock.yaml`` wins over ``yarn.lock``, which wins over
    ``package-lock.json``; without a lockfile the manager defaults to npm.
    """

    for filename, manager in JS_LOCKFILES:
        candidate = working_directory / filename
        if candidate.is_file():
            return manager, candidate
    return DEFAULT_JS_MANAGER, None


def build_key(prefix: str, manager: str, lock_hash: str, *, platform: str | None = None) -> CacheKeyInfo:
    """Compose the primary key and its fallback prefixes.

    Every restore key is a prefix of the primary key, from the same manager on
    the same platform down to any entry sharing ``prefix``.

    Args:
        prefix: User supplied key prefix.
        manager: Package manager label.
        lock_hash: Lockfile hash or ``"no-lock"``.
        platform: Platform label; defaults to :func:`current_platform`.

    Returns:
        CacheKeyInfo: Key information without paths.
    """

    label = platform or current_platform()
    return CacheKeyInfo(
        key=f"{prefix}-{label}-{manager}-{lock_hash}",
        restore_keys=(f"{prefix}-{label}-{manager}-", f"{prefix}-{label}-", f"{prefix}-"),
        paths=(),
    )


def _with_paths(info: CacheKeyInfo, paths: Sequence[Path]) -> CacheKeyInfo:
    return CacheKeyInfo(key=info.key, restore_keys=info.restore_keys, paths=tuple(paths))


def composer_cache_key(
    working_directory: Path,
    *,
    prefix: str,
    cache_dir: Path | None,
    include_vendor: bool,
    platform: str | None = None,
) -> CacheKeyInfo:
    """Return the Composer cache key derived from ``composer.lock``.

    Args:
        working_directory: Project root holding ``composer.lock`` and ``vendor``.
        prefix: Cache key prefix.
        cache_dir: Composer download cache directory, when caching it.
        include_vendor: Whether ``vendor`` is part of the cached paths.
        platform: Platform label override.

    Returns:
        CacheKeyInfo: Key, restore keys and paths.
    """

    info = build_key(
        prefix,
        COMPOSER_MANAGER,
        hash_lockfile(working_directory / COMPOSER_LOCKFILE),
        platform=platform,
    )
    paths: list[Path] = []
    if cache_dir is not None:
        paths.append(cache_dir)
    if include_vendor:
        paths.append(working_directory / VENDOR_DIR)
    return _with_paths(info, paths)


def node_cache_key(
    working_directory: Path,
    *,
    prefix: str,
    cache_dir: Path | None,
    include_node_modules: bool,
    platform: str | None = None,
) -> CacheKeyInfo:
    """Return the JS cache key derived from the preferred lockfile.

    Args:
        working_directory: Project root holding the lockfile and ``node_modules``.
        prefix: Cache key prefix.
        cache_dir: Package manager cache directory, when caching it.
        include_node_modules: Whether ``node_modules`` is part of the cached paths.
        platform: Platform label override.

    Returns:
        CacheKeyInfo: Key, restore keys and paths.
    """

    manager, lockfile = detect_js_lockfile(working_directory)
    lock_hash = hash_lockfile(lockfile) if lockfile is not None else NO_LOCK_HASH
    info = build_key(prefix, manager, lock_hash, platform=platform)
    paths: list[Path] = []
    if cache_dir is not None:
        paths.append(cache_dir)
    if include_node_modules:
        paths.append(working_directory / NODE_MODULES_DIR)
    return _with_paths(info, paths)


__all__ = [
    "COMPOSER_LOCKFILE",
    "JS_LOCKFILES",
    "NO_LOCK_HASH",
    "CacheKeyInfo",
    "JsPackageManager",
    "build_key",
    "composer_cache_key",
    "current_platform",
    "detect_js_lockfile",
    "hash_lockfile",
    "node_cache_key",
]
