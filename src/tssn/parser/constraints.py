"""Extraction of structured constraints from free-form column comments."""

from __future__ import annotations

from tssn.constants import (
    AUTO_INCREMENT,
    CHECK_IN,
    DEFAULT_VALUE,
    FOREIGN_KEY,
    INDEX,
    PRIMARY_KEY,
    UNIQUE,
)
from tssn.models import (
    AutoIncrementConstraint,
    CheckConstraint,
    Constraint,
    DefaultConstraint,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from tssn.parser.identifier import unescape_identifier


def parse_constraints(comment: str) -> list[Constraint]:
    """Extract every recognised constraint from a column comment.

    Recognises PRIMARY KEY / PK, UNIQUE, INDEX, AUTO_INCREMENT / IDENTITY,
    FK / FOREIGN KEY -> [schema.]Table(col) [, ON ...], DEFAULT value and
    CHECK IN (...). Checks are independent; duplicates are kept.
    """
    if not comment:
        return []

    constraints: list[Constraint] = []

    if PRIMARY_KEY.search(comment):
        constraints.append(PrimaryKeyConstraint())

    if UNIQUE.search(comment):
        constraints.append(UniqueConstraint())

    if INDEX.search(comment):
        constraints.append(IndexConstraint())

    if AUTO_INCREMENT.search(comment):
        constraints.append(AutoIncrementConstraint())

    fk_match = FOREIGN_KEY.search(comment)
    if fk_match:
        constraints.append(_foreign_key(fk_match.groups()))

    default_match = DEFAULT_VALUE.search(comment)
    if default_match:
        constraints.append(DefaultConstraint(value=default_match.group(1).strip()))

    check_match = CHECK_IN.search(comment)
    if check_match:
        constraints.append(CheckConstraint(expression=check_match.group(1).strip()))

    return constraints


def _foreign_key(groups: tuple[str | None, ...]) -> ForeignKeyConstraint:
    quoted_schema, schema, quoted_table, table, quoted_column, column, action = groups

    if quoted_schema is not None:
        schema = unescape_identifier(quoted_schema)
    if quoted_table is not None:
        table = unescape_identifier(quoted_table)
    if quoted_column is not None:
        column = unescape_identifier(quoted_column)

    return ForeignKeyConstraint(
        reference_table=table or "",
        reference_column=column or "",
        reference_schema=schema,
        reference_action=action.strip() if action else None,
    )
