# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum


class DiagnosticSeverity(str, Enum):
    """Severity levels shown in the problem list."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


def severity_for_priority(priority: int, *, error_threshold: int, warn_threshold: int) -> DiagnosticSeverity:
    """Map a PMD rule priority onto a diagnostic severity.

    Lower priorities are more severe. Both thresholds are inclusive.

    Args:
        priority: Priority reported by PMD for the violation (1 is highest).
        error_threshold: Highest priority value still reported as an error.
        warn_threshold: Highest priority value still reported as a warning.

    Returns:
        DiagnosticSeverity: Severity bucket for ``priority``.
    """

    if priority <= error_threshold:
        return DiagnosticSeverity.ERROR
    if priority <= warn_threshold:
        return DiagnosticSeverity.WARNING
    return DiagnosticSeverity.INFORMATION


__all__ = ["DiagnosticSeverity", "severity_for_priority"]
