# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``ciqa run`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ..execution import Orchestrator
from ..reporting import write_json_report
from ..runtime.workflow import GITHUB_OUTPUT_ENV, GITHUB_STEP_SUMMARY_ENV, resolve_env_file
from .shared import build_cli_logger, cache_overrides, input_env, load_cli_settings, resolve_working_directory


def run_command(
    tools: str | None = typer.Option(
        None,
        "--tools",
        envvar=input_env("tools"),
        help="Comma separated tools to run, or 'all'.",
    ),
    php_paths: str | None = typer.Option(
        None,
        "--php-paths",
        envvar=input_env("php-paths"),
        help="Newline separated glob patterns selecting PHP files.",
    ),
    js_paths: str | None = typer.Option(
        None,
        "--js-paths",
        envvar=input_env("js-paths"),
        help="Newline separated glob patterns selecting JavaScript and TypeScript files.",
    ),
    style_paths: str | None = typer.Option(
        None,
        "--style-paths",
        envvar=input_env("style-paths"),
        help="Newline separated glob patterns selecting stylesheets.",
    ),
    phpstan_config: str | None = typer.Option(
        None, "--phpstan-config", envvar=input_env("phpstan-config"), help="PHPStan configuration file."
    ),
    phpmd_config: str | None = typer.Option(
        None, "--phpmd-config", envvar=input_env("phpmd-config"), help="PHPMD ruleset file."
    ),
    php_cs_fixer_config: str | None = typer.Option(
        None,
        "--php-cs-fixer-config",
        envvar=input_env("php-cs-fixer-config"),
        help="PHP-CS-Fixer configuration file.",
    ),
    eslint_config: str | None = typer.Option(
        None, "--eslint-config", envvar=input_env("eslint-config"), help="ESLint configuration file."
    ),
    stylelint_config: str | None = typer.Option(
        None, "--stylelint-config", envvar=input_env("stylelint-config"), help="Stylelint configuration file."
    ),
    editorconfig_config: str | None = typer.Option(
        None, "--editorconfig-config", envvar=input_env("editorconfig-config"), help="EditorConfig file."
    ),
    composer_normalize_config: str | None = typer.Option(
        None,
        "--composer-normalize-config",
        envvar=input_env("composer-normalize-config"),
        help="composer.json to normalize.",
    ),
    typo3_rector_config: str | None = typer.Option(
        None, "--typo3-rector-config", envvar=input_env("typo3-rector-config"), help="Rector configuration file."
    ),
    working_directory: Path | None = typer.Option(
        None,
        "--working-directory",
        envvar=input_env("working-directory"),
        help="Directory the tools run in (default: current directory).",
    ),
    fail_on_errors: bool | None = typer.Option(
        None,
        "--fail-on-errors/--no-fail-on-errors",
        envvar=input_env("fail-on-errors"),
        help="Exit with status 1 when any issue is found.",
    ),
    tool_timeout: float | None = typer.Option(
        None,
        "--tool-timeout",
        envvar=input_env("tool-timeout"),
        help="Per-tool timeout in seconds; 0 disables it.",
    ),
    cache: bool | None = typer.Option(
        None, "--cache/--no-cache", envvar=input_env("cache"), help="Restore and save dependency caches."
    ),
    cache_key_prefix: str | None = typer.Option(
        None, "--cache-key-prefix", envvar=input_env("cache-key-prefix"), help="Prefix of every cache key."
    ),
    composer_cache: bool | None = typer.Option(
        None,
        "--composer-cache/--no-composer-cache",
        envvar=input_env("composer-cache"),
        help="Cache the Composer download cache.",
    ),
    composer_vendor: bool | None = typer.Option(
        None,
        "--composer-vendor/--no-composer-vendor",
        envvar=input_env("composer-vendor"),
        help="Cache the vendor directory.",
    ),
    npm_cache: bool | None = typer.Option(
        None,
        "--npm-cache/--no-npm-cache",
        envvar=input_env("npm-cache"),
        help="Cache the npm, Yarn or pnpm download cache.",
    ),
    node_modules: bool | None = typer.Option(
        None,
        "--node-modules/--no-node-modules",
        envvar=input_env("node-modules"),
        help="Cache the node_modules directory.",
    ),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", envvar=input_env("cache-dir"), help="Directory holding cache archives."
    ),
    report_file: Path | None = typer.Option(
        None, "--report-file", help="Also write the JSON report to this file."
    ),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    debug: bool = typer.Option(False, "--debug", envvar="RUNNER_DEBUG", help="Print debug messages."),
) -> None:
    """Run the selected analysers and report their findings."""

    root = resolve_working_directory(working_directory)
    overrides = {
        "tools": tools,
        "php_paths": php_paths,
        "js_paths": js_paths,
        "style_paths": style_paths,
        "configs": {
            "phpstan": phpstan_config,
            "phpmd": phpmd_config,
            "php-cs-fixer": php_cs_fixer_config,
            "eslint": eslint_config,
            "stylelint": stylelint_config,
            "editorconfig": editorconfig_config,
            "composer-normalize": composer_normalize_config,
            "typo3-rector": typo3_rector_config,
        },
        "fail_on_errors": fail_on_errors,
        "tool_timeout": tool_timeout,
        "cache": cache_overrides(
            enabled=cache,
            key_prefix=cache_key_prefix,
            composer_cache=composer_cache,
            composer_vendor=composer_vendor,
            npm_cache=npm_cache,
            node_modules=node_modules,
            directory=cache_dir,
        ),
    }
    settings = load_cli_settings(root, overrides)
    logger = build_cli_logger(emoji=emoji, debug=debug, no_color=no_color)
    orchestrator = Orchestrator(
        settings,
        logger,
        summary_path=resolve_env_file(GITHUB_STEP_SUMMARY_ENV),
        output_path=resolve_env_file(GITHUB_OUTPUT_ENV),
    )
    outcome = orchestrator.run()
    if report_file is not None:
        write_json_report(outcome.results, report_file)
    raise typer.Exit(code=1 if outcome.failed else 0)


__all__ = ["run_command"]
