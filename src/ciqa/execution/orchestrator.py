# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High level orchestration of a lint run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..cache import CacheBackend, CacheManager, LocalCacheBackend
from ..config.models import ActionSettings
from ..config.resolver import ConfigResolver
from ..core.logging import ActionLogger
from ..core.models import RunnerConfig, ToolResult, total_issue_count
from ..reporting import GitHubReporter, RunStatus, write_step_outputs
from ..runtime.process import CommandExecutor, execute_command
from ..tools.availability import check_tool_availability, log_tool_not_found
from ..tools.registry import ToolSpec
from .selection import select_tools


@dataclass(frozen=True, slots=True)
class OrchestratorDeps:
    """Collaborators of an :class:`Orchestrator`, replaceable in tests.

    Attributes:
        executor: Command executor used by availability checks, runners and the cache manager.
        cache_backend: Cache store; defaults to a local store in the configured directory.
        resolver: Config resolver; defaults to one logging through the run logger.
        platform: Platform label override for cache keys.
    """

    executor: CommandExecutor = execute_command
    cache_backend: CacheBackend | None = None
    resolver: ConfigResolver | None = None
    platform: str | None = None


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Aggregated result of one run.

    Attributes:
        results: Tool results in execution order.
        total_issues: Sum of issue counts across results.
        status: ``failed`` when ``fail-on-errors`` is set and issues were found.
        report: JSON report text.
        annotations: Number of annotations emitted.
    """

    results: tuple[ToolResult, ...]
    total_issues: int
    status: RunStatus
    report: str
    annotations: int

    @property
    def failed(self) -> bool:
        """Return ``True`` when the run should exit with a failure status."""

        return self.status == "failed"


class Orchestrator:
    """Run the selected tools in order and publish their results.

    The pipeline is: tool selection, cache restore, then for every tool an
    availability check, file selection, config resolution and the run itself,
    followed by reporting and cache save. A failure inside one tool never
    affects the others.
    """

    def __init__(
        self,
        settings: ActionSettings,
        logger: ActionLogger,
        *,
        deps: OrchestratorDeps | None = None,
        summary_path: Path | None = None,
        output_path: Path | None = None,
    ) -> None:
        self._settings = settings
        self._logger = logger
        self._deps = deps or OrchestratorDeps()
        self._resolver = self._deps.resolver or ConfigResolver(logger)
        self._summary_path = summary_path
        self._output_path = output_path

    def run(self) -> RunOutcome:
        """Execute the full pipeline.

        Returns:
            RunOutcome: Results, totals, status and report of the run.
        """

        settings = self._settings
        selection = select_tools(settings.tools)
        for name in selection.unknown:
            self._logger.warn(f"Unknown tool: {name}")
        self._logger.info("Starting code quality checks...")
        self._logger.info(f"Tools to run: {', '.join(selection.names)}")

        cache_manager = self._cache_manager()
        cache_state = cache_manager.restore()

        results: list[ToolResult] = []
        for spec in selection.tools:
            result = self.run_tool(spec)
            if result is not None:
                results.append(result)

        reporter = GitHubReporter(results, self._logger)
        annotations = reporter.generate_annotations()
        reporter.generate_summary(self._summary_path)
        report = reporter.get_report()
        total = total_issue_count(results)
        failed = settings.fail_on_errors and total > 0
        status: RunStatus = "failed" if failed else "success"
        if self._output_path is not None:
            write_step_outputs(self._output_path, total_issues=total, status=status, report=report)

        cache_manager.save(cache_state)

        if failed:
            self._logger.error(f"Found {total} code quality issues")
        elif total > 0:
            self._logger.warn(f"Found {total} code quality issues (not failing due to configuration)")
        else:
            self._logger.ok("All code quality checks passed!")
        return RunOutcome(
            results=tuple(results),
            total_issues=total,
            status=status,
            report=report,
            annotations=annotations,
        )

    def run_tool(self, spec: ToolSpec) -> ToolResult | None:
        """Run a single tool in isolation.

        Args:
            spec: Registry entry of the tool.

        Returns:
            ToolResult | None: The tool's result, or ``None`` when the tool is
            not installed and was skipped.
        """

        settings = self._settings
        working_directory = settings.working_directory
        try:
            if not check_tool_availability(
                spec.name, working_directory, executor=self._deps.executor, timeout=settings.tool_timeout
            ):
                log_tool_not_found(spec.name, self._logger)
                return None
            files = spec.select_files(settings)
            if not files:
                self._logger.info(f"No files found for {spec.name}, skipping...")
                return ToolResult(tool=spec.display_name, success=True)
            config_path = self._resolver.resolve(spec.name, settings.config_for(spec.name), working_directory)
            self._logger.info(f"Found {len(files)} files to check with {spec.name}")
            config = RunnerConfig(
                working_directory=working_directory,
                file_paths=files,
                config_path=config_path,
                timeout=settings.tool_timeout,
            )
            return spec.runner.run(config, logger=self._logger, executor=self._deps.executor)
        except Exception as exc:  # noqa: BLE001 - one failing tool must not abort the run
            self._logger.error(f"Error running {spec.name}: {exc}")
            return ToolResult(tool=spec.display_name, success=False, raw_output=str(exc))

    def _cache_manager(self) -> CacheManager:
        backend = self._deps.cache_backend or LocalCacheBackend(self._settings.cache.directory)
        return CacheManager(
            self._settings.cache,
            self._settings.working_directory,
            backend,
            self._logger,
            executor=self._deps.executor,
            platform=self._deps.platform,
            timeout=self._settings.tool_timeout,
        )


__all__ = ["Orchestrator", "OrchestratorDeps", "RunOutcome"]
