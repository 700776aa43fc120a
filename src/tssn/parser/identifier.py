"""Reader for bare and backtick-quoted identifiers."""

from __future__ import annotations

from tssn.constants import FULL_SIMPLE_IDENTIFIER, QUOTED_IDENTIFIER, SIMPLE_IDENTIFIER


def unescape_identifier(raw: str) -> str:
    """Collapse doubled backticks inside a quoted identifier."""
    return raw.replace("``", "`")


def parse_identifier(text: str) -> tuple[str, str] | None:
    """Read an identifier from the start of ``text``.

    Returns ``(name, rest)`` or ``None`` when ``text`` does not start with a
    valid identifier (including an unterminated quoted one).
    """
    if text.startswith("`"):
        match = QUOTED_IDENTIFIER.match(text)
        if not match:
            return None
        return unescape_identifier(match.group(1)), text[match.end() :]

    match = SIMPLE_IDENTIFIER.match(text)
    if not match:
        return None
    return match.group(0), text[match.end() :]


def quote_identifier(name: str) -> str:
    """Render ``name`` bare when possible, otherwise backtick-quoted."""
    if FULL_SIMPLE_IDENTIFIER.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"
