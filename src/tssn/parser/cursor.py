"""Immutable line cursor threaded through the document parser."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LineCursor:
    """Position over an immutable sequence of physical lines.

    Readers never move a cursor in place; ``advance`` returns a new one.
    """

    lines: tuple[str, ...]
    pos: int = 0

    @classmethod
    def from_text(cls, text: str) -> LineCursor:
        return cls(lines=tuple(_LINE_BREAK.split(text or "")), pos=0)

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.lines)

    @property
    def line_number(self) -> int:
        """1-based number of the current line."""
        return self.pos + 1

    @property
    def current(self) -> str:
        """Current line with leading whitespace removed."""
        return self.lines[self.pos].lstrip()

    @property
    def is_blank(self) -> bool:
        return not self.at_end and self.lines[self.pos].strip() == ""

    @property
    def is_comment(self) -> bool:
        return not self.at_end and self.current.startswith("//")

    def advance(self, count: int = 1) -> LineCursor:
        return LineCursor(lines=self.lines, pos=self.pos + count)


def comment_text(line: str) -> str:
    """Return the text after ``//`` on a comment line, trimmed."""
    stripped = line.strip()
    if stripped.startswith("//"):
        return stripped[2:].strip()
    return stripped


def find_comment_start(text: str) -> int:
    """Return the index of the first ``//`` outside single quotes, or -1.

    Union literals may contain ``//`` (e.g. URL-valued enums).
    """
    in_string = False
    for i, ch in enumerate(text):
        if ch == "'":
            in_string = not in_string
        elif ch == "/" and not in_string and text.startswith("//", i):
            return i
    return -1
