"""Typed environment-variable readers.

Each reader returns ``default`` when the variable is unset or blank and
raises ``ValueError`` naming the variable when the value is malformed.
"""

from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_env_str(name: str, default: str | None = None) -> str | None:
    """Return the raw string value of ``name`` or ``default``."""
    value = os.getenv(name)
    if value is None:
        return default
    return value


def get_env_int(name: str, default: int | None = None) -> int | None:
    """Return ``name`` parsed as an integer."""
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw_value}'.") from exc


def get_env_bool(name: str, default: bool | None = None) -> bool | None:
    """Return ``name`` parsed as a boolean flag."""
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw_value}'.")
