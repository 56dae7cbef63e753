# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (console messages, errors, notifications)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from ..constants import OUTPUT_LOGGER_NAME

_HANDLER_ATTR = "_javapmd_handler"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(slots=True)
class CLILogger:
    """Print status lines for a command through its own Rich console."""

    console: Console
    use_emoji: bool
    use_color: bool = True
    debug_enabled: bool = False

    def _emit(self, symbol: str, message: str, style: str) -> None:
        prefix = f"{symbol} " if self.use_emoji else ""
        self.console.print(Text(f"{prefix}{message}", style=style if self.use_color else ""))

    def fail(self, message: str) -> None:
        """Print a failure message."""

        self._emit("❌", message, "red")

    def warn(self, message: str) -> None:
        """Print a warning message."""

        self._emit("⚠️ ", message, "yellow")

    def ok(self, message: str) -> None:
        """Print a success message."""

        self._emit("✅", message, "green")

    def info(self, message: str) -> None:
        """Print an informational message."""

        self._emit("ℹ️ ", message, "cyan")

    def section(self, title: str) -> None:
        """Print a header separating blocks of output.

        Args:
            title: Text shown inside the header.
        """

        if self.use_color and self.console.is_terminal:
            self.console.print()
            self.console.print(Rule(title))
        else:
            self.console.print(f"\n--- {title} ---")

    def debug(self, message: str) -> None:
        """Print a debug message when debug output is enabled."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False, stderr: bool = True) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided preferences.

    Args:
        emoji: Whether messages may include emoji glyphs.
        debug: Whether debug messages should be printed.
        no_color: Whether terminal colour output should be disabled.
        stderr: Print to stderr (keeps stdout free for reports) instead of stdout.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, highlight=False, stderr=stderr, soft_wrap=True, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color, debug_enabled=debug)


@dataclass(slots=True)
class ConsoleNotifier:
    """Show analyzer notifications as CLI failure messages."""

    logger: CLILogger

    def show_error(self, message: str) -> None:
        """Print ``message`` through the logger's failure style."""

        self.logger.fail(message)


def configure_output_logging(*, verbose: bool) -> logging.Logger:
    """Stream the PMD output channel to the current stderr.

    Each call installs a new handler bound to ``sys.stderr`` as it is now and
    detaches the one from the previous call, whose stream may be closed.

    Args:
        verbose: ``True`` to echo command lines and raw PMD output.

    Returns:
        logging.Logger: Logger backing the output channel.
    """

    logger = logging.getLogger(OUTPUT_LOGGER_NAME)
    previous = getattr(logger, _HANDLER_ATTR, None)
    if previous is not None:
        logger.removeHandler(previous)
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    setattr(logger, _HANDLER_ATTR, handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


__all__ = [
    "CLIError",
    "CLILogger",
    "ConsoleNotifier",
    "build_cli_logger",
    "configure_output_logging",
    "detect_tty",
]
