# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for mapping PMD JSON reports onto diagnostics."""

from __future__ import annotations

import pytest
from conftest import make_report, make_violation

from javapmd.config import Config
from javapmd.errors import OutputParseError
from javapmd.output import BufferOutputChannel
from javapmd.parser import ReportParser, load_report
from javapmd.severity import DiagnosticSeverity


def test_violation_maps_to_diagnostic(config: Config) -> None:
    violation = make_violation(10, priority=3)
    violation["description"] = "Avoid X"
    payload = make_report({"/src/A.java": [violation]})

    problems = ReportParser(config).parse(payload)

    [diagnostic] = problems["/src/A.java"]
    assert diagnostic.range.start.line == 9
    assert diagnostic.range.start.character == 0
    assert diagnostic.range.end.character == 100
    assert diagnostic.severity is DiagnosticSeverity.WARNING
    assert diagnostic.message == "Avoid X (rule: Best Practices-AvoidX)"
    assert diagnostic.source == "pmd java"
    assert diagnostic.code is not None
    assert diagnostic.code.value == "AvoidX"
    assert diagnostic.code.target == "https://pmd.github.io/rules#avoidx"


def test_priorities_are_graded_by_thresholds(config: Config) -> None:
    payload = make_report(
        {"/src/A.java": [make_violation(1, priority=1), make_violation(2, priority=4), make_violation(3, priority=5)]},
    )

    severities = [d.severity for d in ReportParser(config).parse(payload)["/src/A.java"]]

    assert severities == [DiagnosticSeverity.ERROR, DiagnosticSeverity.WARNING, DiagnosticSeverity.INFORMATION]


def test_report_without_files_is_empty(config: Config) -> None:
    assert ReportParser(config).parse(make_report({})) == {}


def test_files_without_violations_are_omitted(config: Config) -> None:
    payload = make_report({"/src/Clean.java": [], "/src/B.java": [make_violation(4)]})

    assert list(ReportParser(config).parse(payload)) == ["/src/B.java"]


def test_report_order_is_preserved(config: Config) -> None:
    payload = make_report(
        {
            "/src/Z.java": [make_violation(1)],
            "/src/A.java": [make_violation(7, rule="Second"), make_violation(2, rule="First")],
        },
    )

    problems = ReportParser(config).parse(payload)

    assert list(problems) == ["/src/Z.java", "/src/A.java"]
    assert [d.code.value for d in problems["/src/A.java"] if d.code] == ["Second", "First"]


def test_line_zero_is_clamped(config: Config) -> None:
    payload = make_report({"/src/A.java": [make_violation(0)]})

    [diagnostic] = ReportParser(config).parse(payload)["/src/A.java"]

    assert diagnostic.range.start.line == 0


def test_issue_count_is_logged(config: Config) -> None:
    output = BufferOutputChannel()
    payload = make_report({"/src/A.java": [make_violation(1), make_violation(2)], "/src/B.java": [make_violation(3)]})

    ReportParser(config, output).parse(payload)

    assert output.lines == ["3 issue(s) found"]


@pytest.mark.parametrize("payload", ["", "not json", "[]", '{"formatVersion": 0}'])
def test_malformed_output_raises(payload: str) -> None:
    with pytest.raises(OutputParseError):
        load_report(payload)


def test_unknown_fields_are_ignored() -> None:
    report = load_report(
        '{"files": [{"filename": "A.java", "violations": [], "extra": 1}],'
        ' "processingErrors": [], "configurationErrors": []}',
    )

    assert report.files[0].filename == "A.java"
    assert report.violation_count == 0
