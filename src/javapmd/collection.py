# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-process diagnostic collection keyed by file identity."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from threading import Lock

from .models import Diagnostic


def path_key(path: Path | str) -> Path:
    """Return the identity used to key diagnostics for ``path``."""
    return Path(path).expanduser().resolve()


class DiagnosticCollection:
    """Store diagnostics per file, replacing a file's entry wholesale on update."""

    def __init__(self, name: str = "javapmd") -> None:
        """Initialise an empty collection.

        Args:
            name: Label identifying the collection's producer.
        """

        self.name = name
        self._entries: dict[Path, tuple[Diagnostic, ...]] = {}
        self._lock = Lock()

    def set(self, path: Path, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace every diagnostic recorded for ``path``.

        Args:
            path: File the diagnostics belong to; resolved before use.
            diagnostics: New diagnostics. An empty sequence removes the entry.
        """

        key = path_key(path)
        with self._lock:
            if diagnostics:
                self._entries[key] = tuple(diagnostics)
            else:
                self._entries.pop(key, None)

    def delete(self, path: Path) -> None:
        """Remove the entry for ``path`` if one exists.

        Args:
            path: File whose diagnostics should be dropped.
        """

        with self._lock:
            self._entries.pop(path_key(path), None)

    def clear(self) -> None:
        """Remove every entry."""

        with self._lock:
            self._entries.clear()

    def get(self, path: Path) -> tuple[Diagnostic, ...]:
        """Return the diagnostics recorded for ``path``.

        Args:
            path: File to look up.

        Returns:
            tuple[Diagnostic, ...]: Recorded diagnostics, empty when none exist.
        """

        with self._lock:
            return self._entries.get(path_key(path), ())

    def has(self, path: Path) -> bool:
        """Return ``True`` when ``path`` has an entry.

        Args:
            path: File to look up.

        Returns:
            bool: Whether diagnostics are recorded for ``path``.
        """

        with self._lock:
            return path_key(path) in self._entries

    def items(self) -> list[tuple[Path, tuple[Diagnostic, ...]]]:
        """Return a snapshot of ``(path, diagnostics)`` pairs in insertion order.

        Returns:
            list[tuple[Path, tuple[Diagnostic, ...]]]: Copy that later updates do not affect.
        """

        with self._lock:
            return list(self._entries.items())

    def __iter__(self) -> Iterator[Path]:
        return iter([path for path, _ in self.items()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["DiagnosticCollection", "path_key"]
