# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache storage backends for dependency directories."""

from __future__ import annotations

import os
import re
import shutil
import tarfile
import tempfile
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError

ARCHIVE_SUFFIX: Final[str] = ".tar.gz"
MANIFEST_SUFFIX: Final[str] = ".json"
_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9._-]+$")
_MEMBER_PREFIX: Final[str] = "entry-"


class CacheError(RuntimeError):
    """Raised when a cache entry cannot be stored or restored."""


class CacheKeyError(CacheError):
    """Raised when a cache key contains characters outside ``[A-Za-z0-9._-]``."""


class CacheBackend(Protocol):
    """Storage contract used by the cache manager."""

    def restore(self, paths: Sequence[Path], key: str, restore_keys: Sequence[str]) -> str | None:
        """Restore ``paths`` from ``key`` or the newest entry matching a restore key.

        Returns:
            str | None: Key of the entry restored, ``None`` on a miss.
        """
        ...

    def save(self, paths: Sequence[Path], key: str) -> bool:
        """Store ``paths`` under ``key``.

        Returns:
            bool: ``False`` when an entry already exists for ``key``.
        """
        ...


class CacheManifest(BaseModel):
    """Describe one archived cache entry."""

    model_config = ConfigDict(frozen=True)

    key: str
    paths: tuple[str, ...]
    created: float


def validate_key(key: str) -> str:
    """Return ``key`` unchanged when it is usable as a file name.

    Raises:
        CacheKeyError: If ``key`` is empty or contains unsupported characters.
    """

    if not _KEY_PATTERN.match(key):
        raise CacheKeyError(f"Invalid cache key: {key!r}")
    return key


class LocalCacheBackend:
    """Store each cache entry as a ``tar.gz`` archive in a local directory.

    Every entry consists of ``<key>.tar.gz`` and a ``<key>.json`` manifest
    recording the absolute paths archived. Entries are never overwritten.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Return the directory holding the archives."""

        return self._root

    def _archive_path(self, key: str) -> Path:
        return self._root / f"{key}{ARCHIVE_SUFFIX}"

    def _manifest_path(self, key: str) -> Path:
        return self._root / f"{key}{MANIFEST_SUFFIX}"

    def _load_manifest(self, path: Path) -> CacheManifest | None:
        try:
            return CacheManifest.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError):
            return None

    def _manifests(self) -> list[CacheManifest]:
        if not self._root.is_dir():
            return []
        manifests: list[CacheManifest] = []
        for candidate in self._root.glob(f"*{MANIFEST_SUFFIX}"):
            manifest = self._load_manifest(candidate)
            if manifest is not None and self._archive_path(manifest.key).is_file():
                manifests.append(manifest)
        return manifests

    def lookup(self, key: str, restore_keys: Sequence[str] = ()) -> CacheManifest | None:
        """Return the entry matching ``key`` exactly or, failing that, a prefix.

        Restore keys are tried in order; for each, the newest entry whose key
        starts with it wins.

        Raises:
            CacheKeyError: If a key is malformed.
        """

        validate_key(key)
        for prefix in restore_keys:
            validate_key(prefix)
        exact = self._manifest_path(key)
        if exact.is_file() and self._archive_path(key).is_file():
            manifest = self._load_manifest(exact)
            if manifest is not None:
                return manifest
        manifests = self._manifests()
        for prefix in restore_keys:
            matching = [manifest for manifest in manifests if manifest.key.startswith(prefix)]
            if matching:
                return max(matching, key=lambda manifest: manifest.created)
        return None

    def restore(self, paths: Sequence[Path], key: str, restore_keys: Sequence[str]) -> str | None:
        """Extract the matching archive over the requested ``paths``.

        Only archived paths that were requested are written back.

        Raises:
            CacheKeyError: If a key is malformed.
            CacheError: If the archive cannot be extracted.
        """

        manifest = self.lookup(key, restore_keys)
        if manifest is None:
            return None
        requested = {str(path.absolute()) for path in paths}
        selected = {
            f"{_MEMBER_PREFIX}{index}": Path(original)
            for index, original in enumerate(manifest.paths)
            if original in requested
        }
        if not selected:
            return None
        try:
            with tempfile.TemporaryDirectory(prefix="ciqa-cache-") as scratch:
                scratch_dir = Path(scratch)
                with tarfile.open(self._archive_path(manifest.key), "r:gz") as archive:
                    members = [
                        member for member in archive.getmembers() if member.name.split("/", 1)[0] in selected
                    ]
                    archive.extractall(scratch_dir, members=members, filter="data")
                for member_name, destination in selected.items():
                    _copy_into(scratch_dir / member_name, destination)
        except (OSError, tarfile.TarError) as exc:
            raise CacheError(f"Unable to restore cache entry {manifest.key}: {exc}") from exc
        return manifest.key

    def save(self, paths: Sequence[Path], key: str) -> bool:
        """Archive ``paths`` under ``key`` unless the entry already exists.

        Raises:
            CacheKeyError: If ``key`` is malformed.
            CacheError: If the archive cannot be written.
        """

        validate_key(key)
        archive_path = self._archive_path(key)
        manifest_path = self._manifest_path(key)
        if archive_path.is_file() and manifest_path.is_file():
            return False
        originals = tuple(str(path.absolute()) for path in paths)
        manifest = CacheManifest(key=key, paths=originals, created=time.time())
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(dir=self._root, suffix=".partial")
            os.close(handle)
            temp_path = Path(temp_name)
            try:
                # The archive lands last; an entry counts only once both files exist.
                manifest_path.write_text(manifest.model_dump_json(), encoding="utf-8")
                with tarfile.open(temp_path, "w:gz") as archive:
                    for index, original in enumerate(originals):
                        archive.add(original, arcname=f"{_MEMBER_PREFIX}{index}")
                os.replace(temp_path, archive_path)
            except (OSError, tarfile.TarError):
                if not archive_path.is_file():
                    manifest_path.unlink(missing_ok=True)
                raise
            finally:
                temp_path.unlink(missing_ok=True)
        except (OSError, tarfile.TarError) as exc:
            raise CacheError(f"Unable to save cache entry {key}: {exc}") from exc
        return True


def _copy_into(source: Path, destination: Path) -> None:
    """Copy an extracted file or directory onto ``destination``, merging directories."""

    if source.is_dir():
        shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)


__all__ = [
    "CacheBackend",
    "CacheError",
    "CacheKeyError",
    "CacheManifest",
    "LocalCacheBackend",
    "validate_key",
]
