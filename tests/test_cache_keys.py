# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for lockfile based cache key derivation."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from ciqa.cache.keys import (
    NO_LOCK_HASH,
    build_key,
    composer_cache_key,
    detect_js_lockfile,
    hash_lockfile,
    node_cache_key,
)

WriteFiles = Callable[[Mapping[str, str]], Path]


def test_hash_is_deterministic_and_short(write_files: WriteFiles) -> None:
    root = write_files({"composer.lock": '{"packages": []}'})
    first = hash_lockfile(root / "composer.lock")
    assert first == hash_lockfile(root / "composer.lock")
    assert len(first) == 8
    assert int(first, 16) >= 0


def test_single_byte_change_alters_hash(write_files: WriteFiles) -> None:
    root = write_files({"composer.lock": '{"packages": []}'})
    before = hash_lockfile(root / "composer.lock")
    (root / "composer.lock").write_text('{"packages": [] }', encoding="utf-8")
    assert hash_lockfile(root / "composer.lock") != before


def test_missing_lockfile_hashes_to_no_lock(tmp_path: Path) -> None:
    assert hash_lockfile(tmp_path / "composer.lock") == NO_LOCK_HASH


def test_build_key_restore_keys_are_prefixes() -> None:
    info = build_key("qa", "composer", "abcd1234", platform="linux")
    assert info.key == "qa-linux-composer-abcd1234"
    assert info.restore_keys == ("qa-linux-composer-", "qa-linux-", "qa-")
    assert all(info.key.startswith(prefix) for prefix in info.restore_keys)
    lengths = [len(prefix) for prefix in info.restore_keys]
    assert lengths == sorted(lengths, reverse=True)


@pytest.mark.parametrize(
    ("files", "expected"),
    [
        ({"pnpm-lock.yaml": "", "yarn.lock": "", "package-lock.json": "{}"}, "pnpm"),
        ({"yarn.lock": "", "package-lock.json": "{}"}, "yarn"),
        ({"package-lock.json": "{}"}, "npm"),
        ({}, "npm"),
    ],
)
def test_detect_js_lockfile_preference(write_files: WriteFiles, files: dict[str, str], expected: str) -> None:
    root = write_files(files)
    manager, lockfile = detect_js_lockfile(root)
    assert manager == expected
    assert (lockfile is None) is (not files)


def test_composer_cache_key_paths(write_files: WriteFiles) -> None:
    root = write_files({"composer.lock": "{}"})
    cache_dir = root / ".composer-cache"

    info = composer_cache_key(root, prefix="ciqa", cache_dir=cache_dir, include_vendor=True, platform="linux")

    assert info.key == f"ciqa-linux-composer-{hash_lockfile(root / 'composer.lock')}"
    assert info.paths == (cache_dir, root / "vendor")
    assert composer_cache_key(root, prefix="ciqa", cache_dir=None, include_vendor=False).paths == ()


def test_node_cache_key_without_lockfile(tmp_path: Path) -> None:
    info = node_cache_key(tmp_path, prefix="ciqa", cache_dir=None, include_node_modules=True, platform="darwin")
    assert info.key == "ciqa-darwin-npm-no-lock"
    assert info.paths == (tmp_path / "node_modules",)


def test_node_cache_key_uses_preferred_lockfile(write_files: WriteFiles) -> None:
    root = write_files({"yarn.lock": "# yarn v1", "package-lock.json": "{}"})
    info = node_cache_key(root, prefix="ciqa", cache_dir=None, include_node_modules=False, platform="linux")
    assert info.key == f"ciqa-linux-yarn-{hash_lockfile(root / 'yarn.lock')}"
