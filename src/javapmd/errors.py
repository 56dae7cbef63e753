# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised while preparing, running and mapping PMD analyses."""

from __future__ import annotations

from collections.abc import Sequence


class PmdError(RuntimeError):
    """Base class for failures surfaced by the PMD integration."""


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ConfigInvalidError(PmdError):
    """Raised when the PMD install path or ruleset list cannot be used."""


class ProcessSpawnError(PmdError):
    """Raised when the PMD executable could not be started."""

    def __init__(self, command: Sequence[str], cause: OSError) -> None:
        """Initialise the error with the attempted command and the OS failure.

        Args:
            command: Argument vector that failed to spawn.
            cause: Operating system error raised by :mod:`subprocess`.
        """

        super().__init__(f"Unable to start '{command[0]}': {cause}")
        self.command = tuple(command)
        self.cause = cause


class ProcessExitError(PmdError):
    """Raised when PMD exits with a code outside the success set."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Initialise the error with the captured process state.

        Args:
            message: Human-readable error message shown to the user.
            returncode: Exit status reported by the process, when known.
            stdout: Standard output captured before the failure.
            stderr: Standard error captured before the failure.
        """

        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class RulesetLoadError(ProcessExitError):
    """Raised when PMD reports that a configured ruleset could not be loaded."""


class OutputLimitExceededError(ProcessExitError):
    """Raised when PMD produced more output than the configured buffer allows."""


class OutputParseError(PmdError):
    """Raised when PMD output is not a JSON report of the expected shape."""


class DocumentAccessError(PmdError):
    """Raised when a reported source file cannot be opened or indexed."""


class AnalysisCancelledError(PmdError):
    """Raised when a cancellation request terminated the PMD process."""


__all__ = [
    "AnalysisCancelledError",
    "ConfigError",
    "ConfigInvalidError",
    "DocumentAccessError",
    "OutputLimitExceededError",
    "OutputParseError",
    "PmdError",
    "ProcessExitError",
    "ProcessSpawnError",
    "RulesetLoadError",
]
