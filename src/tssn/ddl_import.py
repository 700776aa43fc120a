"""Build a :class:`Schema` from SQL DDL text using sqlglot.

Only ``CREATE TABLE`` and ``CREATE INDEX`` statements contribute. Declared
column types are rendered in the source dialect and normalized through
:func:`tssn.type_mapper.map_type`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import sqlglot
from sqlglot import exp

from tssn.dialect import normalize_dialect, to_sqlglot_dialect
from tssn.models import (
    Annotation,
    AutoIncrementConstraint,
    Column,
    Constraint,
    DefaultConstraint,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
    Schema,
    SimpleType,
    Table,
    TableConstraint,
    UniqueConstraint,
)
from tssn.type_mapper import MAX_LENGTH_SENTINEL, map_type

logger = logging.getLogger(__name__)

_TYPE_PARAMS = re.compile(r"\(([^)]*)\)")
_SERIAL_TYPES = {"serial", "smallserial", "bigserial"}


@dataclass
class _ColumnDraft:
    name: str
    column_type: SimpleType
    nullable: bool = True
    constraints: list[Constraint] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    def add(self, constraint: Constraint) -> None:
        if constraint not in self.constraints:
            self.constraints.append(constraint)

    def build(self) -> Column:
        return Column(
            name=self.name,
            type=self.column_type,
            nullable=self.nullable,
            constraints=self.constraints,
            annotations=self.annotations,
        )


@dataclass
class _TableDraft:
    name: str
    schema_name: Optional[str] = None
    columns: dict[str, _ColumnDraft] = field(default_factory=dict)
    table_constraints: list[TableConstraint] = field(default_factory=list)

    def build(self) -> Table:
        annotations: list[Annotation] = []
        metadata: list[str] = []
        if self.schema_name:
            annotations.append(Annotation(name="schema", value=self.schema_name))
            metadata.append(f"@schema: {self.schema_name}")
        return Table(
            name=self.name,
            columns=[c.build() for c in self.columns.values()],
            table_constraints=self.table_constraints,
            annotations=annotations,
            metadata=metadata,
        )


def split_declared_type(declared: str) -> tuple[str, Optional[int], Optional[int]]:
    """Split ``NUMBER(10, 2)`` into ``("NUMBER", 10, 2)``.

    ``MAX`` becomes the ``-1`` length sentinel; an array suffix stays on the
    name so the type mapper can flag it.
    """
    text = declared.strip()
    suffix = ""
    if text.endswith("[]"):
        suffix = "[]"
        text = text[:-2].rstrip()

    params: list[str] = []
    match = _TYPE_PARAMS.search(text)
    if match:
        params = [p.strip() for p in match.group(1).split(",")]
        text = f"{text[: match.start()]} {text[match.end() :]}"

    name = " ".join(text.split()) + suffix
    length = _type_param(params[0]) if params else None
    scale = _type_param(params[1]) if len(params) > 1 else None
    return name, length, scale


def _type_param(raw: str) -> Optional[int]:
    if raw.upper() == "MAX":
        return MAX_LENGTH_SENTINEL
    try:
        return int(raw)
    except ValueError:
        return None


def import_ddl(sql: str, dialect: Optional[str] = None) -> Schema:
    """Parse DDL text in ``dialect`` into a :class:`Schema`.

    Statements sqlglot cannot parse are skipped rather than failing the whole
    document.
    """
    normalized = normalize_dialect(dialect)
    read = to_sqlglot_dialect(normalized)
    statements = sqlglot.parse(sql, read=read, error_level=sqlglot.ErrorLevel.IGNORE)

    tables: dict[str, _TableDraft] = {}
    for statement in statements:
        if not isinstance(statement, exp.Create):
            continue
        kind = (statement.args.get("kind") or "").upper()
        if kind == "TABLE":
            draft = _table_from_create(statement, normalized, read)
            if draft is not None:
                tables[draft.name] = draft
        elif kind == "INDEX":
            _apply_index(statement, tables)
        else:
            logger.debug("Skipping CREATE %s statement", kind)

    logger.debug("Imported %d tables from %s DDL", len(tables), normalized)
    return Schema(tables=[t.build() for t in tables.values()])


def _table_from_create(statement: exp.Create, dialect: str, read: str) -> Optional[_TableDraft]:
    schema_node = statement.this
    if not isinstance(schema_node, exp.Schema):
        logger.warning("Skipping CREATE TABLE without column list: %s", statement.sql(dialect=read))
        return None

    table_node = schema_node.this
    draft = _TableDraft(name=table_node.name, schema_name=table_node.db or None)

    for expression in schema_node.expressions:
        if isinstance(expression, exp.ColumnDef):
            column = _column_from_def(expression, dialect, read)
            draft.columns[column.name] = column
        else:
            _apply_table_constraint(expression, draft)

    logger.debug("Imported table %s with %d columns", draft.name, len(draft.columns))
    return draft


def _column_from_def(expression: exp.ColumnDef, dialect: str, read: str) -> _ColumnDraft:
    kind = expression.args.get("kind")
    declared = kind.sql(dialect=read) if kind is not None else ""
    type_name, length, scale = split_declared_type(declared)
    mapped = map_type(dialect, type_name, length, scale)

    column = _ColumnDraft(
        name=expression.name,
        column_type=SimpleType(base=mapped.base, length=mapped.length, is_array=mapped.is_array),
    )
    if mapped.format_hint:
        column.annotations.append(Annotation(name="format", value=mapped.format_hint))
    if type_name.lower() in _SERIAL_TYPES:
        column.add(AutoIncrementConstraint())

    for constraint in expression.args.get("constraints") or []:
        _apply_column_constraint(constraint.kind, column, read)
    return column


def _apply_column_constraint(kind: exp.Expression, column: _ColumnDraft, read: str) -> None:
    if isinstance(kind, exp.PrimaryKeyColumnConstraint):
        column.add(PrimaryKeyConstraint())
        column.nullable = False
    elif isinstance(kind, exp.NotNullColumnConstraint):
        column.nullable = bool(kind.args.get("allow_null"))
    elif isinstance(kind, exp.UniqueColumnConstraint):
        column.add(UniqueConstraint())
    elif isinstance(kind, (exp.AutoIncrementColumnConstraint, exp.GeneratedAsIdentityColumnConstraint)):
        column.add(AutoIncrementConstraint())
    elif isinstance(kind, exp.DefaultColumnConstraint):
        column.add(DefaultConstraint(value=kind.this.sql(dialect=read)))
    elif isinstance(kind, exp.Reference):
        reference = _reference_target(kind)
        if reference is not None:
            column.add(reference)


def _apply_table_constraint(expression: exp.Expression, draft: _TableDraft) -> None:
    for primary_key in expression.find_all(exp.PrimaryKey):
        for name in _identifier_names(primary_key.expressions):
            column = _draft_column(draft, name)
            if column is not None:
                column.add(PrimaryKeyConstraint())
                column.nullable = False

    for foreign_key in expression.find_all(exp.ForeignKey):
        names = _identifier_names(foreign_key.expressions)
        reference = foreign_key.args.get("reference")
        target = _reference_target(reference) if reference is not None else None
        if len(names) != 1 or target is None:
            logger.warning("Skipping composite or unresolved foreign key on %s", draft.name)
            continue
        column = _draft_column(draft, names[0])
        if column is not None:
            column.add(target)

    for unique in expression.find_all(exp.UniqueColumnConstraint):
        names = _identifier_names(unique.find_all(exp.Identifier))
        if len(names) == 1:
            column = _draft_column(draft, names[0])
            if column is not None:
                column.add(UniqueConstraint())
        elif names:
            draft.table_constraints.append(TableConstraint(kind="UNIQUE", columns=names))


def _apply_index(statement: exp.Create, tables: dict[str, _TableDraft]) -> None:
    table_node = statement.find(exp.Table)
    draft = tables.get(table_node.name) if table_node is not None else None
    if draft is None:
        logger.warning("Skipping index on unknown table: %s", statement.sql())
        return

    names = _identifier_names(statement.find_all(exp.Ordered))
    if len(names) == 1:
        column = _draft_column(draft, names[0])
        if column is not None:
            column.add(IndexConstraint())
    elif names:
        draft.table_constraints.append(TableConstraint(kind="INDEX", columns=names))


def _reference_target(reference: exp.Expression) -> Optional[ForeignKeyConstraint]:
    table_node = reference.find(exp.Table)
    if table_node is None:
        return None

    columns: list[str] = []
    target = reference.this
    if isinstance(target, exp.Schema):
        columns = _identifier_names(target.expressions)
    if len(columns) != 1:
        return None

    return ForeignKeyConstraint(
        reference_table=table_node.name,
        reference_column=columns[0],
        reference_schema=table_node.db or None,
    )


def _identifier_names(nodes) -> list[str]:
    names: list[str] = []
    for node in nodes:
        if isinstance(node, exp.Identifier):
            names.append(node.name)
            continue
        identifier = node.find(exp.Identifier)
        names.append(identifier.name if identifier is not None else node.name)
    return [n for n in names if n]


def _draft_column(draft: _TableDraft, name: str) -> Optional[_ColumnDraft]:
    column = draft.columns.get(name)
    if column is None:
        logger.warning("Constraint on %s references unknown column %s", draft.name, name)
    return column
