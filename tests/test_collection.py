# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the in-process diagnostic collection."""

from __future__ import annotations

from pathlib import Path

from javapmd.collection import DiagnosticCollection
from javapmd.models import Diagnostic, Range
from javapmd.severity import DiagnosticSeverity


def _diagnostic(message: str = "Avoid X") -> Diagnostic:
    return Diagnostic(range=Range.on_line(0, 0, 1), message=message, severity=DiagnosticSeverity.WARNING)


def test_set_replaces_entry_wholesale(tmp_path: Path) -> None:
    collection = DiagnosticCollection()
    path = tmp_path / "A.java"

    collection.set(path, [_diagnostic("one"), _diagnostic("two")])
    collection.set(path, [_diagnostic("three")])

    assert [d.message for d in collection.get(path)] == ["three"]
    assert len(collection) == 1


def test_paths_are_keyed_by_identity(tmp_path: Path) -> None:
    collection = DiagnosticCollection()
    (tmp_path / "src").mkdir()

    collection.set(tmp_path / "src" / ".." / "A.java", [_diagnostic()])

    assert collection.has(tmp_path / "A.java")


def test_empty_set_and_delete_remove_entries(tmp_path: Path) -> None:
    collection = DiagnosticCollection()
    first, second = tmp_path / "A.java", tmp_path / "B.java"
    collection.set(first, [_diagnostic()])
    collection.set(second, [_diagnostic()])

    collection.set(first, [])
    collection.delete(second)
    collection.delete(tmp_path / "never-set.java")

    assert len(collection) == 0
    assert collection.get(first) == ()


def test_items_is_a_snapshot_in_insertion_order(tmp_path: Path) -> None:
    collection = DiagnosticCollection()
    collection.set(tmp_path / "Z.java", [_diagnostic()])
    collection.set(tmp_path / "A.java", [_diagnostic()])

    snapshot = collection.items()
    collection.clear()

    assert [path.name for path, _ in snapshot] == ["Z.java", "A.java"]
    assert list(collection) == []
