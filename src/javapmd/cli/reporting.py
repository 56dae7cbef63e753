# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render published diagnostics for the terminal or as JSON."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Final, Literal

from rich.console import Console
from rich.text import Text

from ..models import Diagnostic
from ..severity import DiagnosticSeverity

OutputFormat = Literal["text", "json"]

_SEVERITY_STYLES: Final[dict[DiagnosticSeverity, str]] = {
    DiagnosticSeverity.ERROR: "bold red",
    DiagnosticSeverity.WARNING: "yellow",
    DiagnosticSeverity.INFORMATION: "cyan",
}

FileDiagnostics = tuple[Path, tuple[Diagnostic, ...]]


def diagnostic_to_dict(path: Path, diagnostic: Diagnostic) -> dict[str, Any]:
    """Return a JSON-serialisable view of ``diagnostic`` with 1-based positions."""

    return {
        "file": str(path),
        "line": diagnostic.range.start.line + 1,
        "column": diagnostic.range.start.character + 1,
        "end_line": diagnostic.range.end.line + 1,
        "end_column": diagnostic.range.end.character + 1,
        "severity": diagnostic.severity.value,
        "message": diagnostic.message,
        "rule": diagnostic.code.value if diagnostic.code else None,
        "url": diagnostic.code.target if diagnostic.code else None,
        "source": diagnostic.source,
    }


def render_json(entries: Iterable[FileDiagnostics]) -> str:
    """Return every diagnostic as a JSON array."""

    payload = [diagnostic_to_dict(path, diagnostic) for path, diagnostics in entries for diagnostic in diagnostics]
    return json.dumps(payload, indent=2)


def severity_counts(entries: Iterable[FileDiagnostics]) -> Counter[DiagnosticSeverity]:
    """Count diagnostics per severity."""

    return Counter(diagnostic.severity for _, diagnostics in entries for diagnostic in diagnostics)


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def render_text(entries: Iterable[FileDiagnostics], *, console: Console, root: Path) -> None:
    """Print one ``path:line:column: severity message`` row per diagnostic."""

    for path, diagnostics in entries:
        location = _display_path(path, root)
        for diagnostic in diagnostics:
            start = diagnostic.range.start
            text = Text(f"{location}:{start.line + 1}:{start.character + 1}: ", style="bold")
            text.append(diagnostic.severity.value, style=_SEVERITY_STYLES[diagnostic.severity])
            text.append(f" {diagnostic.message}")
            if diagnostic.code is not None and diagnostic.code.target:
                text.append(f" <{diagnostic.code.target}>", style="dim")
            console.print(text)


def summary_line(counts: Counter[DiagnosticSeverity], file_count: int) -> str:
    """Return a one-line summary such as ``3 issue(s) in 2 file(s) (1 error, 2 warning)``."""

    total = sum(counts.values())
    parts = [f"{counts[severity]} {severity.value}" for severity in DiagnosticSeverity if counts[severity]]
    detail = f" ({', '.join(parts)})" if parts else ""
    return f"{total} issue(s) in {file_count} file(s){detail}"


__all__ = [
    "FileDiagnostics",
    "OutputFormat",
    "diagnostic_to_dict",
    "render_json",
    "render_text",
    "severity_counts",
    "summary_line",
]
