# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool runners wrapping each analyser's command line and output parser."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final, TypeAlias

from ..core.constants import DEFAULT_STYLE_PATHS, ToolName
from ..core.logging import ActionLogger
from ..core.models import Issue, RunnerConfig, ToolResult
from ..parsers import (
    JsonParser,
    OutputParseError,
    ParseChain,
    ResultParser,
    TextParser,
    parse_composer_normalize,
    parse_editorconfig,
    parse_eslint,
    parse_php_cs_fixer,
    parse_phpmd,
    parse_phpstan,
    parse_rector_json,
    parse_rector_text,
    parse_stylelint,
)
from ..runtime.process import TIMEOUT_EXIT_CODE, CommandExecutor, execute_command

ArgBuilder: TypeAlias = Callable[[RunnerConfig], list[str]]

PHPMD_DEFAULT_RULESETS: Final[str] = "cleancode,codesize,controversial,design,naming,unusedcode"


@dataclass(frozen=True, slots=True)
class ToolRunner:
    """Invoke one analyser and convert its output into a :class:`ToolResult`.

    Attributes:
        name: Tool identifier.
        display_name: Human readable name used in results and reports.
        command: Executable followed by any fixed leading arguments.
        build_args: Callable producing the per-invocation arguments.
        parser: Parse strategies applied to the captured output.
    """

    name: ToolName
    display_name: str
    command: tuple[str, ...]
    build_args: ArgBuilder
    parser: ParseChain

    def argv(self, config: RunnerConfig) -> list[str]:
        """Return the complete command line for ``config``."""

        return [*self.command, *self.build_args(config)]

    def run(
        self,
        config: RunnerConfig,
        *,
        logger: ActionLogger,
        executor: CommandExecutor = execute_command,
    ) -> ToolResult:
        """Execute the analyser and normalise its findings.

        ``success`` reflects the exit status only. Output that no parse strategy
        understands is logged and reported as zero issues.

        Args:
            config: Inputs for this invocation.
            logger: Logger receiving progress and parse warnings.
            executor: Command executor, replaceable in tests.

        Returns:
            ToolResult: Normalised outcome of the run.

        Raises:
            FileNotFoundError: If the executable cannot be located.
        """

        logger.info(f"Running {self.display_name}...")
        argv = self.argv(config)
        logger.debug(f"Executing: {' '.join(argv)}")
        result = executor(argv, cwd=config.working_directory, timeout=config.timeout)
        if config.timeout is not None and result.exit_code == TIMEOUT_EXIT_CODE:
            logger.warn(f"{self.display_name} timed out after {config.timeout:g}s")

        def _report_failure(reason: str) -> None:
            logger.warn(f"Failed to parse {self.display_name} output: {reason}")

        issues: Sequence[Issue]
        try:
            issues = self.parser.parse(result, config, on_failure=_report_failure)
        except OutputParseError:
            issues = ()
        return ToolResult(
            tool=self.display_name,
            success=result.ok,
            issues=issues,
            raw_output=result.output,
        )


def _config_flag(config: RunnerConfig, *flag: str) -> list[str]:
    return [*flag, str(config.config_path)] if config.config_path is not None else []


def _phpstan_args(config: RunnerConfig) -> list[str]:
    return ["analyze", "--error-format=json", "--no-progress", *_config_flag(config, "-c"), *config.file_paths]


def _phpmd_args(config: RunnerConfig) -> list[str]:
    targets = ",".join(config.file_paths) if config.file_paths else "."
    rulesets = str(config.config_path) if config.config_path is not None else PHPMD_DEFAULT_RULESETS
    return [targets, "json", rulesets]


def _php_cs_fixer_args(config: RunnerConfig) -> list[str]:
    args = ["fix", "--dry-run", "--format=json", "--diff"]
    if config.config_path is not None:
        args.append(f"--config={config.config_path}")
    return [*args, *config.file_paths]


def _eslint_args(config: RunnerConfig) -> list[str]:
    return ["--format=json", *_config_flag(config, "-c"), *(config.file_paths or (".",))]


def _stylelint_args(config: RunnerConfig) -> list[str]:
    return ["--formatter=json", *_config_flag(config, "--config"), *(config.file_paths or (DEFAULT_STYLE_PATHS,))]


def _editorconfig_args(config: RunnerConfig) -> list[str]:
    return ["check", *config.file_paths]


def _composer_normalize_args(config: RunnerConfig) -> list[str]:
    return ["normalize", "--dry-run", *_config_flag(config)]


def _rector_args(config: RunnerConfig) -> list[str]:
    return [
        "process",
        "--dry-run",
        "--output-format=json",
        *_config_flag(config, "--config"),
        *config.file_paths,
    ]


def _json_chain(transform: Callable[..., Sequence[Issue]]) -> ParseChain:
    return ParseChain((JsonParser(transform),))


RUNNERS: Final[Mapping[ToolName, ToolRunner]] = {
    "phpstan": ToolRunner(
        name="phpstan",
        display_name="PHPStan",
        command=("vendor/bin/phpstan",),
        build_args=_phpstan_args,
        parser=_json_chain(parse_phpstan),
    ),
    "phpmd": ToolRunner(
        name="phpmd",
        display_name="PHPMD",
        command=("vendor/bin/phpmd",),
        build_args=_phpmd_args,
        parser=_json_chain(parse_phpmd),
    ),
    "php-cs-fixer": ToolRunner(
        name="php-cs-fixer",
        display_name="PHP-CS-Fixer",
        command=("vendor/bin/php-cs-fixer",),
        build_args=_php_cs_fixer_args,
        parser=_json_chain(parse_php_cs_fixer),
    ),
    "eslint": ToolRunner(
        name="eslint",
        display_name="ESLint",
        command=("npx", "eslint"),
        build_args=_eslint_args,
        parser=_json_chain(parse_eslint),
    ),
    "stylelint": ToolRunner(
        name="stylelint",
        display_name="Stylelint",
        command=("npx", "stylelint"),
        build_args=_stylelint_args,
        parser=_json_chain(parse_stylelint),
    ),
    "editorconfig": ToolRunner(
        name="editorconfig",
        display_name="EditorConfig",
        command=("vendor/bin/editorconfig-cli",),
        build_args=_editorconfig_args,
        parser=ParseChain((TextParser(parse_editorconfig, include_stderr=True),)),
    ),
    "composer-normalize": ToolRunner(
        name="composer-normalize",
        display_name="Composer Normalize",
        command=("composer",),
        build_args=_composer_normalize_args,
        parser=ParseChain((ResultParser(parse_composer_normalize),)),
    ),
    "typo3-rector": ToolRunner(
        name="typo3-rector",
        display_name="TYPO3 Rector",
        command=("vendor/bin/rector",),
        build_args=_rector_args,
        parser=ParseChain((JsonParser(parse_rector_json), TextParser(parse_rector_text))),
    ),
}


__all__ = [
    "PHPMD_DEFAULT_RULESETS",
    "RUNNERS",
    "ArgBuilder",
    "ToolRunner",
]
