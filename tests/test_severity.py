# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for priority to severity mapping."""

from __future__ import annotations

import pytest

from javapmd.severity import DiagnosticSeverity, severity_for_priority


@pytest.mark.parametrize(
    ("priority", "expected"),
    [
        (1, DiagnosticSeverity.ERROR),
        (2, DiagnosticSeverity.ERROR),
        (3, DiagnosticSeverity.WARNING),
        (4, DiagnosticSeverity.WARNING),
        (5, DiagnosticSeverity.INFORMATION),
    ],
)
def test_thresholds_are_inclusive(priority: int, expected: DiagnosticSeverity) -> None:
    assert severity_for_priority(priority, error_threshold=2, warn_threshold=4) is expected


def test_zero_thresholds_demote_everything() -> None:
    assert severity_for_priority(1, error_threshold=0, warn_threshold=0) is DiagnosticSeverity.INFORMATION
