"""Unit tests for building notation schemas from SQL DDL."""

import pytest

from tssn import generate, import_ddl, parse
from tssn.ddl_import import split_declared_type
from tssn.models import (
    Annotation,
    DefaultConstraint,
    PrimaryKeyConstraint,
    SimpleType,
    UniqueConstraint,
)


@pytest.mark.parametrize(
    "declared, expected",
    [
        ("INT", ("INT", None, None)),
        ("VARCHAR(255)", ("VARCHAR", 255, None)),
        ("NUMBER(10, 2)", ("NUMBER", 10, 2)),
        ("NVARCHAR(MAX)", ("NVARCHAR", -1, None)),
        ("DOUBLE  PRECISION", ("DOUBLE PRECISION", None, None)),
        ("TEXT[]", ("TEXT[]", None, None)),
    ],
)
def test_split_declared_type(declared, expected):
    assert split_declared_type(declared) == expected


POSTGRES_DDL = """
CREATE TABLE users (
    id INT PRIMARY KEY,
    email VARCHAR(255) NOT NULL UNIQUE,
    nickname VARCHAR(50),
    active BOOLEAN DEFAULT TRUE
);
"""


def test_import_postgres_table():
    schema = import_ddl(POSTGRES_DDL, "postgresql")
    (table,) = schema.tables
    assert table.name == "users"
    assert [c.name for c in table.columns] == ["id", "email", "nickname", "active"]

    id_column = table.column("id")
    assert id_column.type == SimpleType(base="int")
    assert PrimaryKeyConstraint() in id_column.constraints
    assert id_column.nullable is False

    email = table.column("email")
    assert email.type == SimpleType(base="string", length=255)
    assert email.nullable is False
    assert UniqueConstraint() in email.constraints

    assert table.column("nickname").nullable is True
    assert table.column("active").type == SimpleType(base="boolean")
    assert any(isinstance(c, DefaultConstraint) for c in table.column("active").constraints)


def test_import_mysql_boolean_flag():
    schema = import_ddl("CREATE TABLE flags (enabled TINYINT(1) NOT NULL);", "mysql")
    column = schema.tables[0].column("enabled")
    assert column.type == SimpleType(base="boolean")


def test_import_schema_qualified_table_adds_schema_annotation():
    schema = import_ddl("CREATE TABLE sales.orders (id INT PRIMARY KEY);", "postgres")
    table = schema.tables[0]
    assert table.name == "orders"
    assert table.schema_name == "sales"
    assert table.annotations == (Annotation(name="schema", value="sales"),)


def test_imported_schema_generates_parseable_notation():
    schema = import_ddl(POSTGRES_DDL, "postgresql")
    reparsed = parse(generate(schema))
    table = reparsed.tables[0]
    assert table.column("id").primary_key
    assert table.column("email").type == SimpleType(base="string", length=255)


def test_non_table_statements_are_ignored():
    schema = import_ddl("SELECT 1; CREATE TABLE t (id INT);", "sqlite")
    assert [t.name for t in schema.tables] == ["t"]


def test_import_unknown_dialect_raises():
    with pytest.raises(ValueError):
        import_ddl("CREATE TABLE t (id INT);", "db2")
