"""Unit tests for tssn configuration sanity validation."""

import logging

import pytest

from tssn.config.settings import get_default_dialect, validate_configuration


def test_validate_configuration_allows_defaults():
    """Default configuration should pass sanity validation."""
    validate_configuration()


def test_validate_configuration_accepts_explicit_values(monkeypatch):
    monkeypatch.setenv("TSSN_INDENT", "4")
    monkeypatch.setenv("TSSN_TYPE_ALIGNMENT", "30")
    monkeypatch.setenv("TSSN_COMMENT_ALIGNMENT", "60")
    monkeypatch.setenv("TSSN_SORT_COLUMNS", "false")
    monkeypatch.setenv("TSSN_DEFAULT_DIALECT", "mssql")

    validate_configuration()


def test_validate_configuration_rejects_negative_indent(monkeypatch):
    monkeypatch.setenv("TSSN_INDENT", "-1")

    with pytest.raises(RuntimeError) as exc_info:
        validate_configuration()

    assert "TSSN_INDENT must be >= 0" in str(exc_info.value)


def test_validate_configuration_rejects_comment_left_of_type(monkeypatch):
    """The comment column may not sit left of the type column."""
    monkeypatch.setenv("TSSN_TYPE_ALIGNMENT", "40")
    monkeypatch.setenv("TSSN_COMMENT_ALIGNMENT", "20")

    with pytest.raises(RuntimeError) as exc_info:
        validate_configuration()

    assert "TSSN_COMMENT_ALIGNMENT" in str(exc_info.value)


def test_validate_configuration_reports_all_issues(monkeypatch, caplog):
    monkeypatch.setenv("TSSN_INDENT", "wide")
    monkeypatch.setenv("TSSN_ALIGN_TYPES", "sometimes")
    monkeypatch.setenv("TSSN_DEFAULT_DIALECT", "db2")

    with caplog.at_level(logging.ERROR, logger="tssn.config.settings"):
        with pytest.raises(RuntimeError) as exc_info:
            validate_configuration()

    message = str(exc_info.value)
    assert "TSSN_INDENT" in message
    assert "TSSN_ALIGN_TYPES" in message
    assert "TSSN_DEFAULT_DIALECT" in message
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 3


def test_get_default_dialect(monkeypatch):
    assert get_default_dialect() == "postgresql"
    monkeypatch.setenv("TSSN_DEFAULT_DIALECT", "MariaDB")
    assert get_default_dialect() == "mysql"
