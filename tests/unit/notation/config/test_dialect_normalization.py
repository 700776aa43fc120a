"""Unit tests for dialect name normalization."""

import pytest

from tssn.dialect import SUPPORTED_DIALECTS, normalize_dialect, to_sqlglot_dialect


@pytest.mark.parametrize(
    "name, expected",
    [
        ("PostgreSQL", "postgresql"),
        ("postgres", "postgresql"),
        ("pg", "postgresql"),
        ("SQL Server", "sqlserver"),
        ("mssql", "sqlserver"),
        ("tsql", "sqlserver"),
        ("MariaDB", "mysql"),
        (" oracle ", "oracle"),
        ("sqlite3", "sqlite"),
    ],
)
def test_aliases(name, expected):
    assert normalize_dialect(name) == expected


@pytest.mark.parametrize("dialect", SUPPORTED_DIALECTS)
def test_canonical_names_are_stable(dialect):
    assert normalize_dialect(dialect) == dialect


def test_empty_dialect_uses_default(monkeypatch):
    assert normalize_dialect(None) == "postgresql"
    assert normalize_dialect("  ") == "postgresql"
    monkeypatch.setenv("TSSN_DEFAULT_DIALECT", "oracle")
    assert normalize_dialect(None) == "oracle"


def test_unsupported_dialect():
    with pytest.raises(ValueError) as exc_info:
        normalize_dialect("snowflake")

    assert "Unsupported dialect 'snowflake'" in str(exc_info.value)


@pytest.mark.parametrize(
    "name, expected",
    [("postgresql", "postgres"), ("mssql", "tsql"), ("mysql", "mysql"), ("oracle", "oracle"), ("sqlite", "sqlite")],
)
def test_to_sqlglot_dialect(name, expected):
    assert to_sqlglot_dialect(name) == expected
