# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for PMD install and ruleset validation."""

from __future__ import annotations

from pathlib import Path

from conftest import RecordingNotifier

from javapmd.constants import DEFAULT_RULESET
from javapmd.output import BufferOutputChannel
from javapmd.rulesets import INVALID_PMD_PATH_MESSAGE, check_pmd_path, check_rulesets, valid_ruleset_paths


def test_missing_rulesets_are_reported_and_dropped(tmp_path: Path, ruleset: Path, notifier: RecordingNotifier) -> None:
    missing = tmp_path / "missing.xml"

    valid = valid_ruleset_paths([missing, ruleset], notifier=notifier)

    assert valid == [ruleset]
    assert notifier.errors == [
        f"No Ruleset found at {missing}. Ensure configuration correct or change back to the default.",
    ]


def test_validation_is_idempotent(tmp_path: Path, ruleset: Path) -> None:
    configured = [ruleset, tmp_path / "gone.xml", ruleset]

    assert valid_ruleset_paths(configured) == valid_ruleset_paths(configured) == [ruleset, ruleset]


def test_directories_are_not_rulesets(tmp_path: Path) -> None:
    assert check_rulesets([tmp_path])[0].valid is False


def test_bundled_default_ruleset_exists() -> None:
    assert valid_ruleset_paths([DEFAULT_RULESET]) == [DEFAULT_RULESET]


def test_pmd_path_must_be_a_directory(tmp_path: Path, pmd_home: Path, notifier: RecordingNotifier) -> None:
    output = BufferOutputChannel()
    not_a_dir = tmp_path / "pmd.zip"
    not_a_dir.write_text("", encoding="utf-8")

    assert check_pmd_path(pmd_home, notifier=notifier, output=output) is True
    assert check_pmd_path(not_a_dir, notifier=notifier, output=output) is False
    assert check_pmd_path(None, notifier=notifier, output=output) is False

    assert notifier.errors == [INVALID_PMD_PATH_MESSAGE, INVALID_PMD_PATH_MESSAGE]
    assert output.lines == [str(not_a_dir), ""]
