# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate a PMD analysis: validate, run, parse and publish diagnostics."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .command import PmdCommand, build_command
from .config import Config
from .constants import LOG_SEPARATOR
from .documents import FileDocumentProvider
from .errors import AnalysisCancelledError, ConfigInvalidError, DocumentAccessError, PmdError
from .interfaces import CancellationToken, DiagnosticSink, DocumentProvider, Notifier, OutputChannel, ProgressReporter
from .models import Diagnostic, ProblemMap
from .parser import ReportParser
from .process import ProcessRunner
from .rulesets import NO_VALID_RULESETS_MESSAGE, check_pmd_path, valid_ruleset_paths


class AnalysisState(str, Enum):
    """Lifecycle stages of a single analysis run."""

    IDLE = "idle"
    VALIDATING = "validating"
    RUNNING = "running"
    CANCELLED = "cancelled"
    PARSING = "parsing"
    APPLYING = "applying"
    DONE = "done"
    FAILED = "failed"


class StatusIndicator(str, Enum):
    """Coarse status shown to the user while and after analysing."""

    THINKING = "thinking"
    OK = "ok"
    ERRORS = "errors"


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """Result of :meth:`PmdAnalyzer.run`."""

    target: Path
    state: AnalysisState
    status: StatusIndicator
    updated_files: tuple[Path, ...] = ()
    skipped_files: tuple[Path, ...] = ()
    diagnostic_count: int = 0
    error: PmdError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the run finished without failing or being cancelled."""
        return self.state is AnalysisState.DONE


StatusListener = Callable[[StatusIndicator], None]


class _NullNotifier:
    def show_error(self, message: str) -> None:
        return None


@dataclass(slots=True)
class _RunContext:
    """Mutable bookkeeping for one call to :meth:`PmdAnalyzer.run`."""

    target: Path
    token: CancellationToken | None
    status: StatusIndicator = StatusIndicator.THINKING
    updated: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    diagnostic_count: int = 0

    @property
    def cancelled(self) -> bool:
        return self.token is not None and self.token.is_cancellation_requested


class PmdAnalyzer:
    """Run PMD against a file or directory and publish the resulting diagnostics.

    The analyzer keeps only the active :class:`Config` and the list of ruleset
    paths that passed validation. Each :meth:`run` spawns at most one PMD
    process; overlapping runs against the same collection should be
    serialised by the caller.
    """

    def __init__(
        self,
        output: OutputChannel,
        config: Config,
        *,
        notifier: Notifier | None = None,
        documents: DocumentProvider | None = None,
        runner: ProcessRunner | None = None,
        on_status: StatusListener | None = None,
    ) -> None:
        self._output = output
        self._notifier: Notifier = notifier or _NullNotifier()
        self._documents: DocumentProvider = documents or FileDocumentProvider()
        self._runner = runner or ProcessRunner(output)
        self._on_status = on_status
        self.config = config
        self._rulesets = valid_ruleset_paths(config.rulesets, notifier=self._notifier)

    @property
    def rulesets(self) -> list[Path]:
        """Return the configured rulesets that exist on disk."""
        return list(self._rulesets)

    def update_configuration(self, config: Config) -> None:
        """Replace the active configuration and re-validate its rulesets."""
        self.config = config
        self._rulesets = valid_ruleset_paths(config.rulesets, notifier=self._notifier)

    def build_command(self, target: Path) -> PmdCommand:
        """Return the PMD invocation for ``target`` using the validated rulesets."""
        return build_command(target, self._rulesets, self.config)

    def execute(self, target: Path, token: CancellationToken | None = None) -> str:
        """Run PMD against ``target`` and return its JSON output."""
        command = self.build_command(target)
        self._output.append_line(f"env: {json.dumps(dict(command.env))}")
        self._output.append_line(f"PMD Command: {command.render()}")
        return self._runner.execute(command.args, command.env, self.config.command_buffer_size, token)

    def parse_problems(self, payload: str) -> ProblemMap:
        """Map PMD's JSON ``payload`` onto diagnostics grouped by file."""
        return ReportParser(self.config, self._output).parse(payload)

    def run(
        self,
        target: Path,
        collection: DiagnosticSink,
        progress: ProgressReporter | None = None,
        token: CancellationToken | None = None,
    ) -> AnalysisOutcome:
        """Analyse ``target`` and update ``collection`` with the findings.

        Files with findings have their entries replaced; when the report is
        empty the entry for ``target`` itself is removed. Entries for other
        files are never touched on failure or cancellation.

        Args:
            target: File or directory to analyse.
            collection: Diagnostic collection receiving the results.
            progress: Optional receiver for per-file progress increments.
            token: Optional cancellation token. Cancelling kills the PMD
                process; once diagnostics are being applied it is checked
                before each file.

        Returns:
            AnalysisOutcome: Final state, status indicator and counts.
        """

        ctx = _RunContext(target=Path(target).expanduser().resolve(), token=token)
        self._output.append_line(LOG_SEPARATOR)
        self._output.append_line(f"Analyzing {ctx.target}")
        self._set_status(ctx, StatusIndicator.THINKING)

        if not check_pmd_path(self.config.pmd_bin_path, notifier=self._notifier, output=self._output):
            return self._fail(ctx, ConfigInvalidError("PMD path does not reference a valid directory"), notify=False)
        if not self._rulesets:
            self._notifier.show_error(NO_VALID_RULESETS_MESSAGE)
            return self._fail(ctx, ConfigInvalidError("no valid ruleset paths configured"), notify=False)

        try:
            payload = self.execute(ctx.target, token)
            if ctx.cancelled:
                return self._finish(ctx, AnalysisState.CANCELLED)
            problems = self.parse_problems(payload)
            if ctx.cancelled:
                return self._finish(ctx, AnalysisState.CANCELLED)
            return self._apply(ctx, problems, collection, progress)
        except AnalysisCancelledError:
            return self._finish(ctx, AnalysisState.CANCELLED)
        except PmdError as exc:
            return self._fail(ctx, exc)

    def _apply(
        self,
        ctx: _RunContext,
        problems: ProblemMap,
        collection: DiagnosticSink,
        progress: ProgressReporter | None,
    ) -> AnalysisOutcome:
        if not problems:
            collection.delete(ctx.target)
            self._set_status(ctx, StatusIndicator.OK)
            return self._finish(ctx, AnalysisState.DONE)

        self._set_status(ctx, StatusIndicator.ERRORS)
        if progress is not None:
            progress.report(message=f"Processing {len(problems)} file(s)")
        increment = 100 / len(problems)
        for filename, diagnostics in problems.items():
            if ctx.cancelled:
                return self._finish(ctx, AnalysisState.CANCELLED)
            if progress is not None:
                progress.report(increment=increment)
            path = self._resolve_report_path(filename)
            try:
                collection.set(path, self._tighten_ranges(path, diagnostics))
            except DocumentAccessError as exc:
                self._output.append_line(str(exc))
                ctx.skipped.append(path)
                continue
            ctx.updated.append(path)
            ctx.diagnostic_count += len(diagnostics)
        return self._finish(ctx, AnalysisState.DONE)

    def _tighten_ranges(self, path: Path, diagnostics: list[Diagnostic]) -> list[Diagnostic]:
        """Narrow each range to run from the first non-whitespace column to end of line."""
        document = self._documents.open(path)
        return [
            diagnostic.model_copy(update={"range": document.line_at(diagnostic.range.start.line).trimmed_range})
            for diagnostic in diagnostics
        ]

    def _resolve_report_path(self, filename: str) -> Path:
        path = Path(filename)
        return path if path.is_absolute() else self.config.workspace_root_path / path

    def _set_status(self, ctx: _RunContext, status: StatusIndicator) -> None:
        ctx.status = status
        if self._on_status is not None:
            self._on_status(status)

    def _fail(self, ctx: _RunContext, error: PmdError, *, notify: bool = True) -> AnalysisOutcome:
        self._set_status(ctx, StatusIndicator.ERRORS)
        if notify:
            self._notifier.show_error(f"Static Analysis Failed. Error Details: {error}")
            self._output.show(True)
        return self._finish(ctx, AnalysisState.FAILED, error=error)

    @staticmethod
    def _finish(ctx: _RunContext, state: AnalysisState, *, error: PmdError | None = None) -> AnalysisOutcome:
        return AnalysisOutcome(
            target=ctx.target,
            state=state,
            status=ctx.status,
            updated_files=tuple(ctx.updated),
            skipped_files=tuple(ctx.skipped),
            diagnostic_count=ctx.diagnostic_count,
            error=error,
        )


__all__ = ["AnalysisOutcome", "AnalysisState", "PmdAnalyzer", "StatusIndicator"]
