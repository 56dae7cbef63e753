# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read-only document access used to tighten diagnostic ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import DocumentAccessError
from .models import Range

# Only CRLF, CR and LF end a line; form feeds and Unicode separators do not.
_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class TextLine:
    """One line of a document, without its line terminator."""

    line_number: int
    text: str

    @property
    def first_non_whitespace_character_index(self) -> int:
        """Return the column of the first non-whitespace character.

        Whitespace-only lines report their full length.
        """
        return len(self.text) - len(self.text.lstrip())

    @property
    def trimmed_range(self) -> Range:
        """Return the range from the first non-whitespace column to the end of line."""
        return Range.on_line(self.line_number, self.first_non_whitespace_character_index, len(self.text))


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Snapshot of a document's text split into lines."""

    path: Path
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, path: Path, text: str) -> TextDocument:
        """Split ``text`` at CRLF, CR and LF into a document snapshot.

        A trailing terminator opens an empty final line, so ``""`` and
        ``"a\\n"`` yield one and two lines respectively.
        """
        return cls(path=path, lines=tuple(_LINE_BREAK.split(text)))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, line_number: int) -> TextLine:
        """Return the line at zero-based ``line_number``.

        Raises:
            DocumentAccessError: If ``line_number`` lies outside the document.
        """
        if not 0 <= line_number < len(self.lines):
            raise DocumentAccessError(
                f"Illegal value for line {line_number} in {self.path} ({len(self.lines)} line(s))",
            )
        return TextLine(line_number=line_number, text=self.lines[line_number])


class FileDocumentProvider:
    """Load documents straight from the filesystem."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def open(self, path: Path) -> TextDocument:
        """Read ``path`` into a :class:`TextDocument`.

        Raises:
            DocumentAccessError: If the file cannot be read.
        """
        try:
            text = path.read_text(encoding=self._encoding, errors="replace")
        except OSError as exc:
            raise DocumentAccessError(f"Unable to open {path}: {exc}") from exc
        return TextDocument.from_text(path, text)


__all__ = ["FileDocumentProvider", "TextDocument", "TextLine"]
