"""Line-oriented parser turning notation text into a :class:`Schema`.

The scanner has two states: between tables and inside an interface body.
Comment lines seen between tables are buffered; a blank line flushes the
buffer to schema-level metadata, an ``interface`` line claims it as the
table's metadata. The parser is fail-fast and raises
:class:`TSSNParseError` on the first malformed line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tssn.constants import INTERFACE_DECL, INTERFACE_KEYWORD, TABLE_CONSTRAINT
from tssn.errors import ParseErrorCode, TSSNParseError
from tssn.models import Column, ParseOptions, Schema, Table, TableConstraint
from tssn.parser.annotations import annotations_from_lines, parse_annotations
from tssn.parser.constraints import parse_constraints
from tssn.parser.cursor import LineCursor, comment_text, find_comment_start
from tssn.parser.identifier import parse_identifier, unescape_identifier
from tssn.parser.type_expr import parse_type_expression

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = ParseOptions()


def parse(text: str, options: ParseOptions | None = None) -> Schema:
    """Parse a notation document into a :class:`Schema`.

    Args:
        text: The notation source.
        options: Switches to disable constraint or annotation extraction.

    Raises:
        TSSNParseError: On the first malformed construct, with its line number.
    """
    opts = options or _DEFAULT_OPTIONS
    cursor = LineCursor.from_text(text)
    tables: list[Table] = []
    schema_metadata: list[str] = []
    pending: list[str] = []

    while not cursor.at_end:
        if cursor.is_blank:
            # A blank line breaks the "immediately preceding" association.
            schema_metadata.extend(pending)
            pending = []
            cursor = cursor.advance()
            continue

        if cursor.is_comment:
            pending.append(comment_text(cursor.current))
            cursor = cursor.advance()
            continue

        if INTERFACE_KEYWORD.match(cursor.current):
            table, cursor = _parse_interface(cursor, pending, opts)
            tables.append(table)
            pending = []
            continue

        raise _error(
            f'Unexpected content: "{cursor.current.strip()}"',
            cursor.line_number,
            ParseErrorCode.UNEXPECTED_CONTENT,
            cursor.current,
        )

    schema_metadata.extend(pending)
    annotations = [] if opts.skip_annotations else annotations_from_lines(schema_metadata)

    logger.debug(
        "Parsed %d tables (%d columns), %d schema metadata lines",
        len(tables),
        sum(len(t.columns) for t in tables),
        len(schema_metadata),
    )
    return Schema(tables=tables, metadata=schema_metadata, annotations=annotations)


@dataclass
class _TableBody:
    """Accumulator for one interface body."""

    columns: list[Column] = field(default_factory=list)
    table_constraints: list[TableConstraint] = field(default_factory=list)
    constraint_comments: list[str] = field(default_factory=list)


def _parse_interface(
    cursor: LineCursor, pending: list[str], options: ParseOptions
) -> tuple[Table, LineCursor]:
    start_line = cursor.line_number
    header = cursor.current

    match = INTERFACE_DECL.match(header)
    if not match:
        raise _error(
            "Invalid interface declaration",
            start_line,
            ParseErrorCode.INVALID_INTERFACE,
            header,
        )

    quoted, simple = match.group(1), match.group(2)
    name = unescape_identifier(quoted) if quoted is not None else simple
    body = _TableBody()

    after_brace = header[match.end() :].strip()
    if after_brace:
        closes_inline = after_brace.endswith("}")
        inline_body = after_brace[:-1].strip() if closes_inline else after_brace
        for segment in split_inline_body(inline_body):
            _consume_body_line(segment, start_line, body, options)
        if closes_inline:
            return _build_table(name, body, pending, options), cursor.advance()

    cursor = cursor.advance()
    while not cursor.at_end:
        line = cursor.lines[cursor.pos].strip()
        if line == "}":
            return _build_table(name, body, pending, options), cursor.advance()
        if line:
            _consume_body_line(line, cursor.line_number, body, options)
        cursor = cursor.advance()

    raise _error(
        f"Unclosed interface {name!r} (missing `}}`)",
        start_line,
        ParseErrorCode.UNCLOSED_INTERFACE,
        header,
    )


def _consume_body_line(line: str, line_number: int, body: _TableBody, options: ParseOptions) -> None:
    if line.startswith("//"):
        text = comment_text(line)
        constraint = None if options.skip_constraints else parse_table_constraint(text)
        if constraint is not None:
            body.table_constraints.append(constraint)
        else:
            body.constraint_comments.append(text)
        return

    comment_start = find_comment_start(line)
    definition = line if comment_start < 0 else line[:comment_start]
    if ":" not in definition:
        raise _error(
            f'Invalid content inside interface: "{line}"',
            line_number,
            ParseErrorCode.UNEXPECTED_CONTENT,
            line,
        )
    body.columns.append(parse_column_line(line, line_number, options))


def parse_column_line(raw_line: str, line_number: int, options: ParseOptions | None = None) -> Column:
    """Parse ``name[?]: type[;] [// comment]`` into a :class:`Column`."""
    opts = options or _DEFAULT_OPTIONS
    line = raw_line.strip()

    comment_start = find_comment_start(line)
    if comment_start >= 0:
        definition = line[:comment_start].strip()
        comment = line[comment_start + 2 :].strip() or None
    else:
        definition = line
        comment = None

    if definition.endswith(";"):
        definition = definition[:-1].rstrip()

    identifier = parse_identifier(definition)
    if identifier is None:
        raise _error(
            f'Invalid column name in: "{line}"',
            line_number,
            ParseErrorCode.INVALID_COLUMN,
            raw_line,
        )
    name, rest = identifier

    nullable = rest.startswith("?")
    if nullable:
        rest = rest[1:]

    rest = rest.lstrip()
    if not rest.startswith(":"):
        raise _error(
            f"Expected ':' after column name in: \"{line}\"",
            line_number,
            ParseErrorCode.INVALID_COLUMN,
            raw_line,
        )
    type_text = rest[1:].strip()

    column_type = parse_type_expression(type_text)
    if column_type is None:
        raise _error(
            f'Invalid type expression "{type_text}" in: "{line}"',
            line_number,
            ParseErrorCode.INVALID_TYPE,
            raw_line,
        )

    constraints = parse_constraints(comment) if comment and not opts.skip_constraints else []
    annotations = parse_annotations(comment) if comment and not opts.skip_annotations else []

    return Column(
        name=name,
        type=column_type,
        nullable=nullable,
        constraints=constraints,
        annotations=annotations,
        comment=comment,
    )


def parse_table_constraint(text: str) -> TableConstraint | None:
    """Recognise ``UNIQUE(a, b)`` / ``INDEX(a, b)`` comment text."""
    match = TABLE_CONSTRAINT.match(text.strip())
    if not match:
        return None
    columns = []
    for raw in match.group(2).split(","):
        column = raw.strip()
        if len(column) >= 2 and column.startswith("`") and column.endswith("`"):
            column = unescape_identifier(column[1:-1])
        if column:
            columns.append(column)
    return TableConstraint(kind=match.group(1).upper(), columns=columns)


def split_inline_body(body: str) -> list[str]:
    """Split a single-line interface body into column segments.

    Segments end at ``;`` outside single quotes. A ``//`` comment runs to the
    end of the line, so ``;`` after it does not split. A segment starting with
    ``//`` belongs to the previous column as its trailing comment.
    """
    parts: list[str] = []
    current: list[str] = []
    in_string = False
    in_comment = False
    for i, ch in enumerate(body):
        if in_comment:
            current.append(ch)
            continue
        if ch == "'":
            in_string = not in_string
        elif ch == "/" and not in_string and body.startswith("//", i):
            in_comment = True
        if ch == ";" and not in_string:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    if "".join(current).strip():
        parts.append("".join(current))

    segments: list[str] = []
    for part in parts:
        text = part.strip()
        if not text:
            continue
        if text.startswith("//") and segments and not segments[-1].startswith("//"):
            segments[-1] = f"{segments[-1]}; {text}"
        else:
            segments.append(text)
    return segments


def _build_table(name: str, body: _TableBody, pending: list[str], options: ParseOptions) -> Table:
    metadata = list(pending)

    table_constraints: list[TableConstraint] = []
    if not options.skip_constraints:
        for line in metadata:
            constraint = parse_table_constraint(line)
            if constraint is not None:
                table_constraints.append(constraint)
    table_constraints.extend(body.table_constraints)

    annotations = [] if options.skip_annotations else annotations_from_lines(metadata)

    logger.debug("Parsed table %s with %d columns", name, len(body.columns))
    return Table(
        name=name,
        columns=body.columns,
        table_constraints=table_constraints,
        annotations=annotations,
        metadata=metadata,
        constraint_comments=body.constraint_comments,
    )


def _error(message: str, line: int, code: ParseErrorCode, source: str | None = None) -> TSSNParseError:
    logger.debug("Parse failure at line %d (%s): %s", line, code.value, message)
    return TSSNParseError(message, line, code=code, source=source)
