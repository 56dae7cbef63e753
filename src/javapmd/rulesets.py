# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation of the PMD install directory and configured ruleset files."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .interfaces import Notifier, OutputChannel


@dataclass(frozen=True, slots=True)
class RulesetCheck:
    """Validity of one configured ruleset path."""

    path: Path
    valid: bool


def check_rulesets(rulesets: Iterable[Path]) -> list[RulesetCheck]:
    """Return the validity of each ruleset in configuration order."""
    return [RulesetCheck(path=Path(ruleset), valid=Path(ruleset).is_file()) for ruleset in rulesets]


def missing_ruleset_message(path: Path) -> str:
    return f"No Ruleset found at {path}. Ensure configuration correct or change back to the default."


NO_VALID_RULESETS_MESSAGE = (
    'No valid Ruleset paths found in "javapmd.rulesets". Ensure configuration correct or change back to the default.'
)
INVALID_PMD_PATH_MESSAGE = "PMD Path Does not reference a valid directory.  Please update or clear"


def valid_ruleset_paths(rulesets: Iterable[Path], *, notifier: Notifier | None = None) -> list[Path]:
    """Return the existing ruleset files, reporting each missing one.

    Args:
        rulesets: Configured ruleset paths.
        notifier: Receives one error notification per missing ruleset.

    Returns:
        list[Path]: Paths that exist, in configuration order. Calling this
        again on unchanged input yields the same list.
    """

    valid: list[Path] = []
    for check in check_rulesets(rulesets):
        if check.valid:
            valid.append(check.path)
        elif notifier is not None:
            notifier.show_error(missing_ruleset_message(check.path))
    return valid


def check_pmd_path(
    pmd_bin_path: Path | None,
    *,
    notifier: Notifier | None = None,
    output: OutputChannel | None = None,
) -> bool:
    """Return ``True`` when ``pmd_bin_path`` is an existing directory.

    Invalid paths are written to ``output`` and reported through ``notifier``.
    """

    if pmd_bin_path is not None and pmd_bin_path.is_dir():
        return True
    if output is not None:
        output.append_line(str(pmd_bin_path or ""))
    if notifier is not None:
        notifier.show_error(INVALID_PMD_PATH_MESSAGE)
    return False


__all__ = [
    "INVALID_PMD_PATH_MESSAGE",
    "NO_VALID_RULESETS_MESSAGE",
    "RulesetCheck",
    "check_pmd_path",
    "check_rulesets",
    "missing_ruleset_message",
    "valid_ruleset_paths",
]
