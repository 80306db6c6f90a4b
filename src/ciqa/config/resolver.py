# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the configuration file each tool should run with."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from ..core.constants import ToolName
from ..core.logging import ActionLogger

DEFAULTS_DIR: Final[Path] = Path(__file__).resolve().parent / "defaults"

CONFIG_FILENAMES: Final[Mapping[ToolName, tuple[str, ...]]] = {
    "phpstan": ("phpstan.neon", "phpstan.neon.dist"),
    "phpmd": ("phpmd.xml", "phpmd.xml.dist"),
    "php-cs-fixer": (".php-cs-fixer.php", ".php-cs-fixer.dist.php"),
    "eslint": (".eslintrc.json", ".eslintrc.js", ".eslintrc.yml", "eslint.config.js"),
    "stylelint": (".stylelintrc.json", ".stylelintrc.js", "stylelint.config.js"),
    "editorconfig": (".editorconfig",),
    "composer-normalize": ("composer.json",),
    "typo3-rector": ("rector.php",),
}

DEFAULT_CONFIG_FILES: Final[Mapping[ToolName, str]] = {
    "phpstan": "phpstan.neon",
    "phpmd": "phpmd.xml",
    "php-cs-fixer": ".php-cs-fixer.php",
    "eslint": ".eslintrc.json",
    "stylelint": ".stylelintrc.json",
}


class ConfigResolver:
    """Pick a configuration file using custom, repository, then bundled sources.

    The first existing candidate wins:

    1. the caller supplied path, resolved under the working directory;
    2. the tool's conventional filenames in the working directory;
    3. the default shipped with ciqa, when one exists for the tool.

    When nothing matches the resolver returns ``None`` and the tool applies
    its built-in defaults. Resolution never raises; every decision is logged.
    """

    def __init__(self, logger: ActionLogger, *, defaults_dir: Path | None = None) -> None:
        self._logger = logger
        self._defaults_dir = defaults_dir if defaults_dir is not None else DEFAULTS_DIR

    def resolve(
        self,
        tool: ToolName,
        custom_path: str | Path | None,
        working_directory: Path,
    ) -> Path | None:
        """Return the configuration file ``tool`` should use.

        Args:
            tool: Tool identifier.
            custom_path: Optional user supplied path, relative to ``working_directory``.
            working_directory: Directory the tool runs in.

        Returns:
            Path | None: Absolute configuration path or ``None`` for tool defaults.
        """

        if custom_path:
            candidate = (working_directory / Path(custom_path)).resolve()
            if candidate.is_file():
                self._logger.info(f"Using custom config for {tool}: {custom_path}")
                return candidate
            self._logger.warn(f"Custom config not found for {tool}: {custom_path}")

        for filename in CONFIG_FILENAMES.get(tool, ()):
            candidate = (working_directory / filename).resolve()
            if candidate.is_file():
                self._logger.info(f"Found repository config for {tool}: {filename}")
                return candidate

        bundled = self.bundled_default(tool)
        if bundled is not None:
            self._logger.info(f"Using default config for {tool}")
            return bundled

        self._logger.info(f"No custom config for {tool}, tool will use its own defaults")
        return None

    def bundled_default(self, tool: ToolName) -> Path | None:
        """Return the shipped default configuration for ``tool`` when present."""

        filename = DEFAULT_CONFIG_FILES.get(tool)
        if filename is None:
            return None
        candidate = self._defaults_dir / filename
        return candidate if candidate.is_file() else None


__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULTS_DIR",
    "DEFAULT_CONFIG_FILES",
    "ConfigResolver",
]
