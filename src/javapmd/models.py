# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models for PMD reports and the diagnostics derived from them."""

from __future__ import annotations

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import DiagnosticSeverity


class PmdViolation(BaseModel):
    """A single rule infraction reported by PMD."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    beginline: int
    begincolumn: int = 0
    endline: int = 0
    endcolumn: int = 0
    description: str
    rule: str
    ruleset: str
    priority: int
    external_info_url: str = Field(default="", alias="externalInfoUrl")


class PmdFile(BaseModel):
    """Violations PMD reported for a single source file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    filename: str
    violations: tuple[PmdViolation, ...] = Field(default_factory=tuple)


class PmdReport(BaseModel):
    """Top-level document emitted by ``pmd check -f json``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    format_version: int | None = Field(default=None, alias="formatVersion")
    pmd_version: str | None = Field(default=None, alias="pmdVersion")
    timestamp: str | None = None
    files: tuple[PmdFile, ...]

    @property
    def violation_count(self) -> int:
        """Return the number of violations across every reported file."""
        return sum(len(entry.violations) for entry in self.files)


class Position(BaseModel):
    """Zero-indexed line/character location inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """Span between two positions, end exclusive."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @model_validator(mode="after")
    def _check_order(self) -> Range:
        """Reject ranges whose end precedes their start."""
        if (self.end.line, self.end.character) < (self.start.line, self.start.character):
            raise ValueError("range end must not precede range start")
        return self

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> Range:
        """Return a range covering ``start``..``end`` on a single line."""
        return cls(start=Position(line=line, character=start), end=Position(line=line, character=end))


class DiagnosticCode(BaseModel):
    """Rule identifier linked to its documentation page."""

    model_config = ConfigDict(frozen=True)

    value: str
    target: str


class Diagnostic(BaseModel):
    """Editor-facing record describing one PMD violation."""

    model_config = ConfigDict(validate_assignment=True)

    range: Range
    message: str
    severity: DiagnosticSeverity
    code: DiagnosticCode | None = None
    source: str | None = None


ProblemMap: TypeAlias = dict[str, list[Diagnostic]]


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "PmdFile",
    "PmdReport",
    "PmdViolation",
    "Position",
    "ProblemMap",
    "Range",
]
