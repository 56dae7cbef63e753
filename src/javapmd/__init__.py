# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PMD static analysis integration: command building, execution and diagnostics."""

from __future__ import annotations

from importlib import metadata

from .analyzer import AnalysisOutcome, AnalysisState, PmdAnalyzer, StatusIndicator
from .config import Config
from .models import Diagnostic, DiagnosticSeverity

__all__ = [
    "AnalysisOutcome",
    "AnalysisState",
    "Config",
    "Diagnostic",
    "DiagnosticSeverity",
    "PmdAnalyzer",
    "StatusIndicator",
    "__version__",
]

try:
    __version__ = metadata.version("javapmd")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
