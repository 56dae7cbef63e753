# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate PMD's JSON report into diagnostics grouped by file."""

from __future__ import annotations

from pydantic import ValidationError

from .config import Config
from .constants import DIAGNOSTIC_SOURCE, PLACEHOLDER_END_COLUMN
from .errors import OutputParseError
from .interfaces import OutputChannel
from .models import Diagnostic, DiagnosticCode, PmdReport, PmdViolation, ProblemMap, Range
from .severity import severity_for_priority


def load_report(payload: str) -> PmdReport:
    """Validate ``payload`` as a PMD JSON report.

    Raises:
        OutputParseError: If ``payload`` is not JSON or lacks the report shape.
    """

    try:
        return PmdReport.model_validate_json(payload)
    except ValidationError as exc:
        raise OutputParseError(f"Unable to parse PMD report: {exc}") from exc


def format_message(violation: PmdViolation) -> str:
    """Return the problem-list text for ``violation``."""
    return f"{violation.description} (rule: {violation.ruleset}-{violation.rule})"


class ReportParser:
    """Map PMD violations onto :class:`Diagnostic` records.

    Ranges initially span columns ``0``..``100`` of the violation's first line;
    the analyzer tightens them against the live document afterwards.
    """

    def __init__(self, config: Config, output: OutputChannel | None = None) -> None:
        self.config = config
        self._output = output

    def create_diagnostic(self, violation: PmdViolation) -> Diagnostic:
        """Return the diagnostic describing a single ``violation``."""

        line = max(violation.beginline - 1, 0)
        return Diagnostic(
            range=Range.on_line(line, 0, PLACEHOLDER_END_COLUMN),
            message=format_message(violation),
            severity=severity_for_priority(
                violation.priority,
                error_threshold=self.config.priority_error_threshold,
                warn_threshold=self.config.priority_warn_threshold,
            ),
            code=DiagnosticCode(value=violation.rule, target=violation.external_info_url),
            source=DIAGNOSTIC_SOURCE,
        )

    def parse(self, payload: str) -> ProblemMap:
        """Parse ``payload`` into diagnostics keyed by reported file name.

        Args:
            payload: JSON text written by ``pmd check -f json``.

        Returns:
            ProblemMap: Insertion-ordered mapping of file names to diagnostics.
            Files without violations are omitted, so a clean run is empty.

        Raises:
            OutputParseError: If ``payload`` is not a PMD JSON report.
        """

        report = load_report(payload)
        problems: ProblemMap = {}
        count = 0
        for entry in report.files:
            for violation in entry.violations:
                problems.setdefault(entry.filename, []).append(self.create_diagnostic(violation))
                count += 1
        if self._output is not None:
            self._output.append_line(f"{count} issue(s) found")
        return problems


__all__ = ["ReportParser", "format_message", "load_report"]
