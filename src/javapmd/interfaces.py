# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Host collaborator interfaces consumed by the analyzer."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .documents import TextDocument
    from .models import Diagnostic


@runtime_checkable
class OutputChannel(Protocol):
    """Append-only operator log receiving command lines and process output."""

    def append(self, text: str) -> None:
        """Append ``text`` without a trailing newline."""

        raise NotImplementedError

    def append_line(self, text: str) -> None:
        """Append ``text`` followed by a newline."""

        raise NotImplementedError

    def show(self, preserve_focus: bool = True) -> None:
        """Reveal the log to the user."""

        raise NotImplementedError


@runtime_checkable
class Notifier(Protocol):
    """Non-blocking user notifications."""

    def show_error(self, message: str) -> None:
        """Display ``message`` as an error notification."""

        raise NotImplementedError


@runtime_checkable
class ProgressReporter(Protocol):
    """Receive coarse progress updates while diagnostics are applied."""

    def report(self, *, message: str | None = None, increment: float | None = None) -> None:
        """Report a status ``message`` and/or a percentage ``increment``."""

        raise NotImplementedError


@runtime_checkable
class CancellationToken(Protocol):
    """Cooperative cancellation signal observed at coarse checkpoints."""

    @property
    def is_cancellation_requested(self) -> bool:
        """Return ``True`` once cancellation has been requested."""

        raise NotImplementedError

    def on_cancellation_requested(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""

        raise NotImplementedError


@runtime_checkable
class DiagnosticSink(Protocol):
    """Diagnostic collection keyed by file identity."""

    def set(self, path: Path, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace every diagnostic recorded for ``path``."""

        raise NotImplementedError

    def delete(self, path: Path) -> None:
        """Remove every diagnostic recorded for ``path``."""

        raise NotImplementedError


@runtime_checkable
class DocumentProvider(Protocol):
    """Resolve live document text for range tightening."""

    def open(self, path: Path) -> TextDocument:
        """Return the current contents of ``path``."""

        raise NotImplementedError


__all__ = [
    "CancellationToken",
    "DiagnosticSink",
    "DocumentProvider",
    "Notifier",
    "OutputChannel",
    "ProgressReporter",
]
