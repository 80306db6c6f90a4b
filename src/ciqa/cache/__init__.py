# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dependency cache keys, storage backends and restore/save orchestration."""

from __future__ import annotations

from .backend import CacheBackend, CacheError, CacheKeyError, LocalCacheBackend
from .keys import CacheKeyInfo, composer_cache_key, hash_lockfile, node_cache_key
from .manager import CacheManager
from .state import CacheState, EcosystemCacheState, read_state_file, write_state_file

__all__ = [
    "CacheBackend",
    "CacheError",
    "CacheKeyError",
    "CacheKeyInfo",
    "CacheManager",
    "CacheState",
    "EcosystemCacheState",
    "LocalCacheBackend",
    "composer_cache_key",
    "hash_lockfile",
    "node_cache_key",
    "read_state_file",
    "write_state_file",
]
