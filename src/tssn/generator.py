"""Render a :class:`Schema` back to notation text.

The generator is the structural inverse of the parser. Raw column comments
are reused verbatim; only columns without one get a comment synthesized from
their constraints and annotations.
"""

from __future__ import annotations

import logging
from typing import Sequence

from tssn.constants import TIMESTAMP_COLUMNS
from tssn.models import (
    Annotation,
    Column,
    Constraint,
    ForeignKeyConstraint,
    GeneratorOptions,
    Schema,
    Table,
    TableConstraint,
)
from tssn.parser.annotations import annotations_from_lines
from tssn.parser.document import parse_table_constraint
from tssn.parser.identifier import quote_identifier
from tssn.parser.type_expr import format_type

logger = logging.getLogger(__name__)

# Order in which synthesized comments list constraints.
_CONSTRAINT_ORDER = {
    "PRIMARY_KEY": 0,
    "AUTO_INCREMENT": 1,
    "UNIQUE": 2,
    "INDEX": 3,
    "FOREIGN_KEY": 4,
    "DEFAULT": 5,
    "CHECK": 6,
}


def generate(schema: Schema, options: GeneratorOptions | None = None) -> str:
    """Render a whole schema; tables are separated by one blank line."""
    opts = options or GeneratorOptions()
    blocks: list[str] = []

    if schema.metadata:
        blocks.append("\n".join(_comment_line(line) for line in schema.metadata))

    for table in schema.tables:
        blocks.append(generate_table(table, opts))

    logger.debug("Generated %d tables", len(schema.tables))
    return "\n\n".join(blocks) + "\n"


def generate_table(table: Table, options: GeneratorOptions | None = None) -> str:
    """Render one interface block with its preceding comment lines."""
    opts = options or GeneratorOptions()
    indent = " " * opts.indent
    lines: list[str] = []

    annotations, constraints = _uncovered_by_metadata(table)
    for annotation in annotations:
        lines.append(f"// @{annotation.name}: {annotation.value}")

    # Metadata lines go out verbatim; they already carry their annotations.
    for line in table.metadata:
        lines.append(_comment_line(line))

    for constraint in constraints:
        lines.append(f"// {format_table_constraint(constraint)}")

    lines.append(f"interface {quote_identifier(table.name)} {{")

    for comment in table.constraint_comments:
        lines.append(indent + _comment_line(comment))

    columns = sort_columns(table.columns) if opts.sort_columns else list(table.columns)
    for column in columns:
        lines.append(indent + generate_column(column, opts))

    lines.append("}")
    return "\n".join(lines)


def generate_column(column: Column, options: GeneratorOptions | None = None) -> str:
    """Render ``name[?]: type;`` plus an aligned trailing comment."""
    opts = options or GeneratorOptions()
    name = quote_identifier(column.name) + ("?" if column.nullable else "")

    if opts.align_types:
        label = f"{name}:"
        width = max(opts.type_alignment - opts.indent, len(label) + 1)
        definition = f"{label.ljust(width)}{format_type(column.type)};"
    else:
        definition = f"{name}: {format_type(column.type)};"

    comment = column.comment or synthesize_comment(column)
    if not comment:
        return definition

    width = max(opts.comment_alignment - opts.indent, len(definition) + 1)
    return f"{definition.ljust(width)}// {comment}"


def synthesize_comment(column: Column) -> str | None:
    """Build a comment from constraints (fixed order) and annotations."""
    parts = [
        describe_constraint(c)
        for c in sorted(column.constraints, key=lambda c: _CONSTRAINT_ORDER.get(c.kind, 99))
    ]
    parts.extend(f"@{a.name}: {a.value}" for a in column.annotations)
    return ", ".join(parts) if parts else None


def describe_constraint(constraint: Constraint) -> str:
    kind = constraint.kind
    if kind == "PRIMARY_KEY":
        return "PRIMARY KEY"
    if kind == "FOREIGN_KEY":
        return _describe_foreign_key(constraint)
    if kind == "DEFAULT":
        return f"DEFAULT {constraint.value}"
    if kind == "CHECK":
        return f"CHECK IN ({constraint.expression})"
    return kind


def _describe_foreign_key(constraint: ForeignKeyConstraint) -> str:
    target = quote_identifier(constraint.reference_table)
    if constraint.reference_schema:
        target = f"{quote_identifier(constraint.reference_schema)}.{target}"
    rendered = f"FK -> {target}({quote_identifier(constraint.reference_column)})"
    if constraint.reference_action:
        rendered += f", {constraint.reference_action}"
    return rendered


def format_table_constraint(constraint: TableConstraint) -> str:
    columns = ", ".join(quote_identifier(c) for c in constraint.columns)
    return f"{constraint.kind}({columns})"


def sort_columns(columns: Sequence[Column]) -> list[Column]:
    """Stable partition: primary keys first, ``*_at`` timestamps last."""
    return sorted(columns, key=_column_rank)


def _column_rank(column: Column) -> int:
    if column.primary_key:
        return 0
    if column.name.lower() in TIMESTAMP_COLUMNS:
        return 2
    return 1


def _uncovered_by_metadata(table: Table) -> tuple[list[Annotation], list[TableConstraint]]:
    """Annotations and table constraints that no metadata line already states."""
    stated_annotations = annotations_from_lines(table.metadata)
    stated_constraints = [
        c for c in (parse_table_constraint(line) for line in table.metadata) if c is not None
    ]
    annotations = [a for a in table.annotations if a not in stated_annotations]
    constraints = [c for c in table.table_constraints if c not in stated_constraints]
    return annotations, constraints


def _comment_line(text: str) -> str:
    return f"// {text}".rstrip()
