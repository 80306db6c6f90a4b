# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``ciqa cache`` commands running the restore and save phases as separate steps."""

from __future__ import annotations

from pathlib import Path

import typer

from ..cache import CacheError, CacheManager, LocalCacheBackend, read_state_file, write_state_file
from ..config import ActionSettings
from ..core.logging import ActionLogger
from .shared import (
    STATE_FILE_ENV,
    build_cli_logger,
    cache_overrides,
    default_state_file,
    input_env,
    load_cli_settings,
    resolve_working_directory,
)

cache_app = typer.Typer(help="Restore or save dependency caches outside a lint run.", no_args_is_help=True)


def _settings(
    working_directory: Path | None,
    *,
    key_prefix: str | None,
    composer_cache: bool | None,
    composer_vendor: bool | None,
    npm_cache: bool | None,
    node_modules: bool | None,
    cache_dir: Path | None,
) -> ActionSettings:
    root = resolve_working_directory(working_directory)
    overrides = {
        "cache": cache_overrides(
            enabled=True,
            key_prefix=key_prefix,
            composer_cache=composer_cache,
            composer_vendor=composer_vendor,
            npm_cache=npm_cache,
            node_modules=node_modules,
            directory=cache_dir,
        ),
    }
    return load_cli_settings(root, overrides)


def _manager(settings: ActionSettings, logger: ActionLogger) -> CacheManager:
    return CacheManager(
        settings.cache,
        settings.working_directory,
        LocalCacheBackend(settings.cache.directory),
        logger,
        timeout=settings.tool_timeout,
    )


@cache_app.command("restore")
def cache_restore(
    working_directory: Path | None = typer.Option(
        None, "--working-directory", envvar=input_env("working-directory"), help="Project root."
    ),
    key_prefix: str | None = typer.Option(
        None, "--cache-key-prefix", envvar=input_env("cache-key-prefix"), help="Prefix of every cache key."
    ),
    composer_cache: bool | None = typer.Option(
        None, "--composer-cache/--no-composer-cache", envvar=input_env("composer-cache")
    ),
    composer_vendor: bool | None = typer.Option(
        None, "--composer-vendor/--no-composer-vendor", envvar=input_env("composer-vendor")
    ),
    npm_cache: bool | None = typer.Option(None, "--npm-cache/--no-npm-cache", envvar=input_env("npm-cache")),
    node_modules: bool | None = typer.Option(
        None, "--node-modules/--no-node-modules", envvar=input_env("node-modules")
    ),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", envvar=input_env("cache-dir")),
    state_file: Path | None = typer.Option(
        None, "--state-file", envvar=STATE_FILE_ENV, help="File recording the restore outcome."
    ),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output."),
    debug: bool = typer.Option(False, "--debug", envvar="RUNNER_DEBUG", help="Print debug messages."),
) -> None:
    """Restore the dependency caches and record hits for ``cache save``."""

    settings = _settings(
        working_directory,
        key_prefix=key_prefix,
        composer_cache=composer_cache,
        composer_vendor=composer_vendor,
        npm_cache=npm_cache,
        node_modules=node_modules,
        cache_dir=cache_dir,
    )
    logger = build_cli_logger(emoji=emoji, debug=debug)
    state = _manager(settings, logger).restore()
    target = state_file or default_state_file()
    try:
        write_state_file(target, state)
    except CacheError as exc:
        logger.warn(str(exc))
        return
    logger.debug(f"Cache state written to {target}")


@cache_app.command("save")
def cache_save(
    working_directory: Path | None = typer.Option(
        None, "--working-directory", envvar=input_env("working-directory"), help="Project root."
    ),
    key_prefix: str | None = typer.Option(
        None, "--cache-key-prefix", envvar=input_env("cache-key-prefix"), help="Prefix of every cache key."
    ),
    composer_cache: bool | None = typer.Option(
        None, "--composer-cache/--no-composer-cache", envvar=input_env("composer-cache")
    ),
    composer_vendor: bool | None = typer.Option(
        None, "--composer-vendor/--no-composer-vendor", envvar=input_env("composer-vendor")
    ),
    npm_cache: bool | None = typer.Option(None, "--npm-cache/--no-npm-cache", envvar=input_env("npm-cache")),
    node_modules: bool | None = typer.Option(
        None, "--node-modules/--no-node-modules", envvar=input_env("node-modules")
    ),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", envvar=input_env("cache-dir")),
    state_file: Path | None = typer.Option(
        None, "--state-file", envvar=STATE_FILE_ENV, help="File written by ``cache restore``."
    ),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output."),
    debug: bool = typer.Option(False, "--debug", envvar="RUNNER_DEBUG", help="Print debug messages."),
) -> None:
    """Save the dependency caches that missed during ``cache restore``."""

    settings = _settings(
        working_directory,
        key_prefix=key_prefix,
        composer_cache=composer_cache,
        composer_vendor=composer_vendor,
        npm_cache=npm_cache,
        node_modules=node_modules,
        cache_dir=cache_dir,
    )
    logger = build_cli_logger(emoji=emoji, debug=debug)
    try:
        state = read_state_file(state_file or default_state_file())
    except CacheError as exc:
        logger.warn(str(exc))
        return
    _manager(settings, logger).save(state)


__all__ = ["cache_app"]
