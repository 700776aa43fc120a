"""Structured parse errors raised by the notation parser."""

from __future__ import annotations

from enum import Enum


class ParseErrorCode(str, Enum):
    """Bounded categories for notation parse failures."""

    INVALID_INTERFACE = "INVALID_INTERFACE"
    INVALID_COLUMN = "INVALID_COLUMN"
    UNCLOSED_INTERFACE = "UNCLOSED_INTERFACE"
    UNEXPECTED_CONTENT = "UNEXPECTED_CONTENT"
    INVALID_TYPE = "INVALID_TYPE"


class TSSNParseError(ValueError):
    """Raised when notation text cannot be parsed.

    The parser is fail-fast: the first error aborts the whole document.

    Attributes:
        message: Human-readable description without the line prefix.
        line: 1-based line number where the error was detected.
        code: Error category.
        source: Offending line text, when available.
    """

    def __init__(
        self,
        message: str,
        line: int,
        code: ParseErrorCode = ParseErrorCode.UNEXPECTED_CONTENT,
        source: str | None = None,
    ) -> None:
        super().__init__(f"Line {line}: {message}")
        self.message = message
        self.line = line
        self.code = code
        self.source = source
