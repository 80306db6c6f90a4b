# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check whether each analyser can be executed in the working directory."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from ..core.constants import ToolName
from ..core.logging import ActionLogger
from ..runtime.process import CommandExecutor, execute_command

VERSION_FLAG: Final[str] = "--version"

VERSION_COMMANDS: Final[Mapping[ToolName, tuple[str, ...]]] = {
    "phpstan": ("vendor/bin/phpstan",),
    "phpmd": ("vendor/bin/phpmd",),
    "php-cs-fixer": ("vendor/bin/php-cs-fixer",),
    "eslint": ("npx", "eslint"),
    "stylelint": ("npx", "stylelint"),
    "editorconfig": ("vendor/bin/editorconfig-cli",),
    "composer-normalize": ("composer",),
    "typo3-rector": ("vendor/bin/rector",),
}

_COMPOSER_HINT: Final[str] = 'Add "{package}" to composer.json require-dev and run composer install'
_NPM_HINT: Final[str] = 'Add "{package}" to package.json devDependencies and run npm install'

INSTALL_HINTS: Final[Mapping[ToolName, str]] = {
    "phpstan": _COMPOSER_HINT.format(package="phpstan/phpstan"),
    "phpmd": _COMPOSER_HINT.format(package="phpmd/phpmd"),
    "php-cs-fixer": _COMPOSER_HINT.format(package="friendsofphp/php-cs-fixer"),
    "eslint": _NPM_HINT.format(package="eslint"),
    "stylelint": _NPM_HINT.format(package="stylelint"),
    "editorconfig": _COMPOSER_HINT.format(package="armin/editorconfig-cli"),
    "composer-normalize": _COMPOSER_HINT.format(package="ergebnis/composer-normalize"),
    "typo3-rector": _COMPOSER_HINT.format(package="ssch/typo3-rector"),
}


def check_tool_availability(
    tool: ToolName,
    working_directory: Path,
    *,
    executor: CommandExecutor = execute_command,
    timeout: float | None = None,
) -> bool:
    """Return ``True`` when ``tool`` answers ``--version`` successfully.

    Any failure to launch the check, such as a missing executable, counts as
    unavailable; so does a non-zero exit status, including the ``124`` of a
    version check that outlived ``timeout``.

    Args:
        tool: Tool identifier.
        working_directory: Directory the check runs in.
        executor: Command executor, replaceable in tests.
        timeout: Optional limit in seconds for the version check.

    Returns:
        bool: Whether the tool can be run.
    """

    command = VERSION_COMMANDS.get(tool)
    if command is None:
        return True
    try:
        result = executor([*command, VERSION_FLAG], cwd=working_directory, timeout=timeout)
    except (OSError, ValueError):
        return False
    return result.ok


def log_tool_not_found(tool: ToolName, logger: ActionLogger) -> None:
    """Warn that ``tool`` is missing, with installation guidance."""

    logger.warn(f"Tool '{tool}' is not available. {INSTALL_HINTS[tool]}")
    logger.warn(f"Skipping {tool} checks.")


__all__ = [
    "INSTALL_HINTS",
    "VERSION_COMMANDS",
    "check_tool_availability",
    "log_tool_not_found",
]
