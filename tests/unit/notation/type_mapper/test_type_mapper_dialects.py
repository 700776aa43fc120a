"""Unit tests for vendor type name mapping across the supported dialects."""

import pytest

from tssn.type_mapper import EXCEPTION_RULES, TYPE_TABLES, MappedType, map_type


def test_every_dialect_has_a_table():
    assert set(TYPE_TABLES) == {"sqlserver", "postgresql", "mysql", "oracle", "sqlite"}


@pytest.mark.parametrize(
    "dialect, sql_type, length, scale, expected",
    [
        ("mysql", "TINYINT", 1, None, MappedType(base="boolean")),
        ("mysql", "TINYINT", None, None, MappedType(base="int")),
        ("mysql", "tinyint", 4, None, MappedType(base="int")),
        ("oracle", "NUMBER", 10, 0, MappedType(base="int")),
        ("oracle", "NUMBER", 10, None, MappedType(base="int")),
        ("oracle", "NUMBER", 10, 2, MappedType(base="decimal")),
        ("oracle", "NUMBER", None, None, MappedType(base="number")),
        ("sqlserver", "VARCHAR", -1, None, MappedType(base="text")),
        ("sqlserver", "NVARCHAR", -1, None, MappedType(base="text")),
    ],
)
def test_exception_rules(dialect, sql_type, length, scale, expected):
    """Dialect-specific rules run before the table lookup."""
    assert map_type(dialect, sql_type, length, scale) == expected


def test_exception_rules_are_ordered_callables():
    assert len(EXCEPTION_RULES) == 3
    assert all(callable(rule) for rule in EXCEPTION_RULES)


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        ("TINYINT", "int"),
        ("BIGINT", "int"),
        ("MONEY", "decimal"),
        ("REAL", "float"),
        ("NTEXT", "text"),
        ("DATETIME2", "datetime"),
        ("BIT", "boolean"),
        ("UNIQUEIDENTIFIER", "uuid"),
        ("IMAGE", "blob"),
        ("ROWVERSION", "blob"),
        ("TIMESTAMP", "blob"),
        ("SQL_VARIANT", "string"),
    ],
)
def test_sqlserver_types(sql_type, expected):
    assert map_type("sqlserver", sql_type).base == expected


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        ("int4", "int"),
        ("bigserial", "int"),
        ("double precision", "float"),
        ("character varying", "string"),
        ("timestamp without time zone", "datetime"),
        ("bytea", "blob"),
        ("jsonb", "json"),
        ("hstore", "json"),
        ("uuid", "uuid"),
        ("bool", "boolean"),
    ],
)
def test_postgresql_types(sql_type, expected):
    assert map_type("postgresql", sql_type).base == expected


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        ("MEDIUMINT", "int"),
        ("DOUBLE", "float"),
        ("LONGTEXT", "text"),
        ("MEDIUMBLOB", "blob"),
        ("YEAR", "int"),
        ("TIMESTAMP", "datetime"),
        ("JSON", "json"),
    ],
)
def test_mysql_types(sql_type, expected):
    assert map_type("mysql", sql_type).base == expected


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        ("VARCHAR2", "string"),
        ("CLOB", "text"),
        ("DATE", "datetime"),
        ("BINARY_DOUBLE", "float"),
        ("LONG RAW", "blob"),
        ("ROWID", "string"),
    ],
)
def test_oracle_types(sql_type, expected):
    assert map_type("oracle", sql_type).base == expected


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        ("INTEGER", "int"),
        ("REAL", "float"),
        ("TEXT", "text"),
        ("BLOB", "blob"),
        ("BOOLEAN", "boolean"),
        ("NUMERIC", "decimal"),
    ],
)
def test_sqlite_types(sql_type, expected):
    assert map_type("sqlite", sql_type).base == expected


@pytest.mark.parametrize(
    "dialect, sql_type, length",
    [
        ("sqlserver", "NVARCHAR", 100),
        ("postgresql", "character varying", 255),
        ("mysql", "CHAR", 2),
        ("oracle", "VARCHAR2", 4000),
        ("sqlite", "VARCHAR", 80),
    ],
)
def test_length_is_preserved_for_allow_listed_types(dialect, sql_type, length):
    assert map_type(dialect, sql_type, length).length == length


@pytest.mark.parametrize(
    "dialect, sql_type",
    [("postgresql", "numeric"), ("mysql", "INT"), ("sqlserver", "DECIMAL"), ("sqlite", "TEXT")],
)
def test_length_is_dropped_for_other_types(dialect, sql_type):
    assert map_type(dialect, sql_type, 10).length is None


def test_length_is_absent_when_not_supplied():
    assert map_type("sqlserver", "VARCHAR").length is None


@pytest.mark.parametrize(
    "dialect, sql_type, base, format_hint",
    [
        ("sqlserver", "DATETIMEOFFSET", "datetime", "tz"),
        ("sqlserver", "XML", "text", "xml"),
        ("sqlserver", "HIERARCHYID", "string", "hierarchyid"),
        ("postgresql", "timestamptz", "datetime", "tz"),
        ("postgresql", "inet", "string", "cidr"),
        ("postgresql", "macaddr", "string", "mac"),
        ("postgresql", "interval", "string", "interval"),
        ("mysql", "POINT", "string", "wkt"),
        ("oracle", "XMLTYPE", "text", "xml"),
        ("oracle", "SDO_GEOMETRY", "string", "wkt"),
    ],
)
def test_format_hints(dialect, sql_type, base, format_hint):
    """Semantic context lost by the base-type collapse is kept as a hint."""
    result = map_type(dialect, sql_type)
    assert result.base == base
    assert result.format_hint == format_hint


def test_plain_types_have_no_format_hint():
    assert map_type("postgresql", "text").format_hint is None


def test_bracket_array_suffix_in_any_dialect():
    result = map_type("mysql", "VARCHAR[]", 20)
    assert result == MappedType(base="string", length=20, is_array=True)


def test_postgres_underscore_array_spelling():
    assert map_type("postgresql", "_int4") == MappedType(base="int", is_array=True)
    assert map_type("postgresql", "_text").base == "text"


def test_underscore_prefix_is_not_an_array_elsewhere():
    result = map_type("mysql", "_custom")
    assert result.is_array is False
    assert result.base == "string"


def test_array_suffix_keeps_format_hint():
    result = map_type("postgresql", "inet[]")
    assert result.is_array
    assert result.format_hint == "cidr"


@pytest.mark.parametrize("dialect", ["sqlserver", "postgresql", "mysql", "oracle", "sqlite"])
def test_unknown_types_fall_back_to_string(dialect):
    assert map_type(dialect, "SOME_CUSTOM_TYPE") == MappedType(base="string")


def test_name_is_trimmed_and_case_insensitive():
    assert map_type("postgresql", "  Double Precision ").base == "float"


def test_dialect_aliases_are_accepted():
    assert map_type("mssql", "BIT").base == "boolean"
    assert map_type("postgres", "int8").base == "int"


def test_unknown_dialect_raises():
    with pytest.raises(ValueError) as exc_info:
        map_type("db2", "INT")

    assert "db2" in str(exc_info.value)
