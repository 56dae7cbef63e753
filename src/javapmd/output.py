# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Operator log ("output channel") implementations."""

from __future__ import annotations

import logging
from threading import Lock

from .constants import OUTPUT_LOGGER_NAME


class LoggerOutputChannel:
    """Forward output-channel text to a stdlib logger, one record per line.

    Partial text passed to :meth:`append` is buffered until a newline
    arrives so streamed process output is not split across records.
    """

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.DEBUG) -> None:
        """Initialise the channel.

        Args:
            logger: Destination logger; defaults to ``javapmd.output``.
            level: Level used for every forwarded line.
        """

        self.logger = logger or logging.getLogger(OUTPUT_LOGGER_NAME)
        self.level = level
        self._pending = ""
        self._lock = Lock()
        self.shown = False

    def append(self, text: str) -> None:
        """Log every line completed by ``text`` and buffer the remainder.

        Args:
            text: Raw text, possibly without a trailing newline.
        """

        with self._lock:
            self._pending += text
            *complete, self._pending = self._pending.split("\n")
        for line in complete:
            self.logger.log(self.level, "%s", line)

    def append_line(self, text: str) -> None:
        """Append ``text`` followed by a newline.

        Args:
            text: Line content without its terminator.
        """

        self.append(f"{text}\n")

    def flush(self) -> None:
        """Emit any buffered partial line."""

        with self._lock:
            pending, self._pending = self._pending, ""
        if pending:
            self.logger.log(self.level, "%s", pending)

    def show(self, preserve_focus: bool = True) -> None:
        """Flush the channel and point the user at it.

        Args:
            preserve_focus: Accepted for interface compatibility; unused.
        """

        # Failures are worth seeing even when debug output is off.
        self.flush()
        self.shown = True
        if not self.logger.isEnabledFor(self.level):
            self.logger.info("See the javapmd output log for details (run with --verbose).")


class BufferOutputChannel:
    """Accumulate output-channel text in memory."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._lock = Lock()
        self.shown = False

    def append(self, text: str) -> None:
        """Store ``text`` as given.

        Args:
            text: Raw text, possibly without a trailing newline.
        """

        with self._lock:
            self._chunks.append(text)

    def append_line(self, text: str) -> None:
        """Store ``text`` followed by a newline.

        Args:
            text: Line content without its terminator.
        """

        self.append(f"{text}\n")

    def show(self, preserve_focus: bool = True) -> None:
        """Record that the channel was revealed.

        Args:
            preserve_focus: Accepted for interface compatibility; unused.
        """

        self.shown = True

    @property
    def text(self) -> str:
        """Return everything appended so far."""

        with self._lock:
            return "".join(self._chunks)

    @property
    def lines(self) -> list[str]:
        """Return :attr:`text` split into lines."""

        return self.text.splitlines()


__all__ = ["BufferOutputChannel", "LoggerOutputChannel"]
