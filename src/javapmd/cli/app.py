# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from threading import Timer
from typing import Annotated, Any, Final

import typer
from rich.console import Console

from ..analyzer import AnalysisOutcome, AnalysisState, PmdAnalyzer
from ..cancellation import CancellationTokenSource
from ..collection import DiagnosticCollection
from ..config import Config
from ..config_loader import load_config
from ..errors import ConfigError
from ..output import LoggerOutputChannel
from ..rulesets import check_rulesets
from ..severity import DiagnosticSeverity
from .progress import RichProgressReporter
from .reporting import FileDiagnostics, OutputFormat, render_json, render_text, severity_counts, summary_line
from .shared import CLIError, CLILogger, ConsoleNotifier, build_cli_logger, configure_output_logging, detect_tty

EXIT_OK: Final[int] = 0
EXIT_ISSUES: Final[int] = 1
EXIT_CONFIG: Final[int] = 2
EXIT_CANCELLED: Final[int] = 130

app = typer.Typer(
    name="javapmd",
    help="Run the PMD static analyzer and report its findings.",
    no_args_is_help=True,
    add_completion=False,
)

RootOption = Annotated[
    Path,
    typer.Option("--root", help="Workspace root; anchors relative paths and the PMD cache."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="TOML file used instead of <root>/.javapmd.toml."),
]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in output.")]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")]


def _load_config(root: Path, config_file: Path | None, overrides: dict[str, Any], *, logger: CLILogger) -> Config:
    try:
        return load_config(root, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc), exit_code=EXIT_CONFIG) from exc


def _run_with_interrupts(
    analyzer: PmdAnalyzer,
    target: Path,
    collection: DiagnosticCollection,
    reporter: RichProgressReporter,
    *,
    timeout: float | None,
) -> AnalysisOutcome:
    """Run ``analyzer`` on a worker thread so Ctrl-C and timeouts cancel PMD."""

    source = CancellationTokenSource()
    timer = Timer(timeout, source.cancel) if timeout else None
    with ThreadPoolExecutor(max_workers=1) as executor:
        if timer is not None:
            timer.start()
        future = executor.submit(analyzer.run, target, collection, reporter, source.token)
        try:
            return future.result()
        except KeyboardInterrupt:
            source.cancel()
            return future.result()
        finally:
            if timer is not None:
                timer.cancel()


def _exit_code(outcome: AnalysisOutcome, collection: DiagnosticCollection) -> int:
    if outcome.state is AnalysisState.CANCELLED:
        return EXIT_CANCELLED
    if outcome.state is AnalysisState.FAILED:
        return EXIT_ISSUES
    counts = severity_counts(collection.items())
    return EXIT_ISSUES if counts[DiagnosticSeverity.ERROR] else EXIT_OK


@app.command("check")
def check_command(
    target: Annotated[Path, typer.Argument(help="Java file or directory to analyse.")],
    root: RootOption = Path(),
    config_file: ConfigOption = None,
    pmd_path: Annotated[
        Path | None,
        typer.Option("--pmd-path", help="PMD installation directory (contains bin/pmd)."),
    ] = None,
    jre_path: Annotated[Path | None, typer.Option("--jre-path", help="JRE used to run PMD.")] = None,
    rulesets: Annotated[
        list[Path] | None,
        typer.Option("--ruleset", "-R", help="Ruleset file; repeat for several."),
    ] = None,
    classpath: Annotated[
        list[str] | None,
        typer.Option("--classpath", help="Additional classpath entry; repeat for several."),
    ] = None,
    cache: Annotated[bool | None, typer.Option("--cache/--no-cache", help="Use PMD's incremental cache.")] = None,
    error_threshold: Annotated[
        int | None,
        typer.Option("--error-threshold", min=0, help="Highest priority reported as an error."),
    ] = None,
    warn_threshold: Annotated[
        int | None,
        typer.Option("--warn-threshold", min=0, help="Highest priority reported as a warning."),
    ] = None,
    buffer_size: Annotated[
        int | None,
        typer.Option("--buffer-size", help="Maximum PMD output per stream, in megabytes."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.0, help="Cancel the analysis after this many seconds."),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: text or json."),
    ] = "text",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Echo the PMD command and raw output.")] = False,
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
) -> None:
    """Analyse TARGET with PMD and print the diagnostics."""

    logger = build_cli_logger(emoji=not no_emoji, debug=verbose, no_color=no_color)
    if output_format not in ("text", "json"):
        logger.fail(f"Unknown format '{output_format}'; expected 'text' or 'json'.")
        raise typer.Exit(code=EXIT_CONFIG)
    fmt: OutputFormat = "json" if output_format == "json" else "text"
    overrides: dict[str, Any] = {
        "pmd_bin_path": pmd_path.resolve() if pmd_path else None,
        "jre_path": jre_path.resolve() if jre_path else None,
        "rulesets": [ruleset.resolve() for ruleset in rulesets] if rulesets else None,
        "additional_class_paths": classpath or None,
        "enable_cache": cache,
        "priority_error_threshold": error_threshold,
        "priority_warn_threshold": warn_threshold,
        "command_buffer_size": buffer_size,
    }
    try:
        config = _load_config(root, config_file, overrides, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    output = LoggerOutputChannel(configure_output_logging(verbose=verbose))
    collection = DiagnosticCollection()
    console = Console(stderr=True, no_color=no_color)
    reporter = RichProgressReporter(console=console, enabled=fmt == "text" and detect_tty())
    analyzer = PmdAnalyzer(
        output,
        config,
        notifier=ConsoleNotifier(logger),
        on_status=reporter.on_status,
    )
    logger.debug(f"pmd={config.pmd_bin_path} rulesets={len(analyzer.rulesets)} cache={config.enable_cache}")
    reporter.start(f"Analyzing {target}")
    try:
        outcome = _run_with_interrupts(analyzer, target, collection, reporter, timeout=timeout)
    finally:
        reporter.stop()
        output.flush()

    entries = sorted(collection.items(), key=lambda item: str(item[0]))
    if fmt == "json":
        typer.echo(render_json(entries))
    else:
        render_text(entries, console=_stdout_console(no_color=no_color), root=config.workspace_root_path)
        _log_outcome(outcome, entries, logger=logger)
    raise typer.Exit(code=_exit_code(outcome, collection))


def _stdout_console(*, no_color: bool) -> Console:
    """Return a console writing diagnostics to stdout."""

    return Console(no_color=no_color, highlight=False, soft_wrap=True)


def _log_outcome(
    outcome: AnalysisOutcome,
    entries: list[FileDiagnostics],
    *,
    logger: CLILogger,
) -> None:
    if outcome.state is AnalysisState.CANCELLED:
        logger.warn("Analysis cancelled; no diagnostics were applied.")
        return
    if outcome.state is AnalysisState.FAILED:
        return
    for skipped in outcome.skipped_files:
        logger.warn(f"Skipped {skipped}: the file could not be read.")
    if entries:
        logger.warn(summary_line(severity_counts(entries), len(entries)))
    else:
        logger.ok(f"No issues found in {outcome.target}")


@app.command("rulesets")
def rulesets_command(
    root: RootOption = Path(),
    config_file: ConfigOption = None,
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
) -> None:
    """List the configured rulesets and whether each one exists."""

    logger = build_cli_logger(emoji=not no_emoji, no_color=no_color, stderr=False)
    try:
        config = _load_config(root, config_file, {}, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    logger.section("Rulesets")
    logger.info(f"Configured for {config.workspace_root_path}")
    checks = check_rulesets(config.rulesets)
    for check in checks:
        if check.valid:
            logger.ok(str(check.path))
        else:
            logger.fail(f"{check.path} (not found)")
    if not any(check.valid for check in checks):
        logger.fail("No valid ruleset paths configured.")
        raise typer.Exit(code=EXIT_ISSUES)
    raise typer.Exit(code=EXIT_OK)


__all__ = ["app"]
