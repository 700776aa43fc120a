"""Reader for column type expressions (simple types and literal unions)."""

from __future__ import annotations

import re

from tssn.constants import SIMPLE_TYPE, UNION_TYPE
from tssn.models import SimpleType, UnionType

_UNION_LITERAL = re.compile(r"'[^']*'|-?\d+")


def parse_type_expression(expr: str) -> SimpleType | UnionType | None:
    """Parse the text after a column's ``:``.

    Returns ``None`` when the expression is neither a literal union nor a
    simple ``base(length)[]`` type.
    """
    text = expr.strip()

    if UNION_TYPE.match(text):
        return _parse_union(text)

    match = SIMPLE_TYPE.match(text)
    if not match:
        return None
    base, length, array = match.groups()
    return SimpleType(
        base=base,
        length=int(length) if length is not None else None,
        is_array=array is not None,
    )


def _parse_union(text: str) -> UnionType:
    values: list[int | str] = []
    for literal in _UNION_LITERAL.findall(text):
        if literal.startswith("'"):
            values.append(literal[1:-1])
        else:
            values.append(int(literal))
    return UnionType(values=values)


def format_type(column_type: SimpleType | UnionType) -> str:
    """Render a column type back to notation text."""
    if isinstance(column_type, UnionType):
        return " | ".join(
            f"'{value}'" if isinstance(value, str) else str(value) for value in column_type.values
        )

    rendered = column_type.base
    if column_type.length is not None:
        rendered += f"({column_type.length})"
    if column_type.is_array:
        rendered += "[]"
    return rendered
