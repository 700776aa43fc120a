"""Shared utilities for SQL dialect names."""

from __future__ import annotations

from typing import Literal, Optional

from tssn.config.env import get_env_str

Dialect = Literal["sqlserver", "postgresql", "mysql", "oracle", "sqlite"]

SUPPORTED_DIALECTS: tuple[Dialect, ...] = ("sqlserver", "postgresql", "mysql", "oracle", "sqlite")

DEFAULT_DIALECT: Dialect = "postgresql"

_ALIASES: dict[str, Dialect] = {
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "pg": "postgresql",
    "sqlserver": "sqlserver",
    "sql server": "sqlserver",
    "mssql": "sqlserver",
    "tsql": "sqlserver",
    "mysql": "mysql",
    "mariadb": "mysql",
    "oracle": "oracle",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
}

_SQLGLOT_DIALECTS: dict[Dialect, str] = {
    "postgresql": "postgres",
    "sqlserver": "tsql",
    "mysql": "mysql",
    "oracle": "oracle",
    "sqlite": "sqlite",
}


def normalize_dialect(dialect: Optional[str]) -> Dialect:
    """Normalize a dialect name or alias to one of the supported dialects.

    Args:
        dialect: The dialect name (e.g., 'PostgreSQL', 'mssql'). Empty values
            fall back to ``TSSN_DEFAULT_DIALECT`` (default ``postgresql``).

    Returns:
        The canonical dialect name.

    Raises:
        ValueError: If the name is not a supported dialect.
    """
    if not dialect or not dialect.strip():
        dialect = get_env_str("TSSN_DEFAULT_DIALECT", DEFAULT_DIALECT) or DEFAULT_DIALECT

    key = dialect.strip().lower()
    normalized = _ALIASES.get(key)
    if normalized is None:
        raise ValueError(
            f"Unsupported dialect '{dialect}'. Must be one of {sorted(SUPPORTED_DIALECTS)}."
        )
    return normalized


def to_sqlglot_dialect(dialect: Optional[str]) -> str:
    """Return the sqlglot reader name for a dialect or alias."""
    return _SQLGLOT_DIALECTS[normalize_dialect(dialect)]
