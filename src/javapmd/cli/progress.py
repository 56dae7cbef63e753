# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress rendering helpers for PMD runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Final

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from ..analyzer import StatusIndicator

PROGRESS_TOTAL: Final[float] = 100.0

_STATUS_LABELS: Final[dict[StatusIndicator, str]] = {
    StatusIndicator.THINKING: "Running PMD",
    StatusIndicator.OK: "No issues found",
    StatusIndicator.ERRORS: "Issues detected",
}


@dataclass(slots=True)
class RichProgressReporter:
    """Render analyzer progress and status changes on a Rich progress bar."""

    console: Console
    enabled: bool = True
    progress_factory: type[Progress] = Progress
    progress: Progress | None = field(init=False, default=None)
    task_id: TaskID | None = field(init=False, default=None)
    lock: Lock = field(init=False, default_factory=Lock)

    def start(self, description: str) -> None:
        """Create the progress display when rendering is enabled."""

        if not self.enabled:
            return
        self.progress = self.progress_factory(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(description, total=PROGRESS_TOTAL)

    def stop(self) -> None:
        """Tear down the progress display."""

        if self.progress is not None:
            self.progress.stop()
            self.progress = None
            self.task_id = None

    def report(self, *, message: str | None = None, increment: float | None = None) -> None:
        """Apply a progress update emitted by the analyzer."""

        with self.lock:
            if self.progress is None or self.task_id is None:
                return
            if message is not None:
                self.progress.update(self.task_id, description=message)
            if increment is not None:
                self.progress.advance(self.task_id, increment)

    def on_status(self, status: StatusIndicator) -> None:
        """Reflect the analyzer's status indicator in the task description."""

        self.report(message=_STATUS_LABELS[status])


__all__ = ["RichProgressReporter"]
