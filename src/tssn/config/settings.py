"""Startup-time configuration sanity checks for the notation toolkit."""

from __future__ import annotations

import logging

from tssn.config.env import get_env_bool, get_env_int
from tssn.dialect import Dialect, normalize_dialect

logger = logging.getLogger(__name__)


def get_default_dialect() -> Dialect:
    """Return the dialect used when callers do not name one."""
    return normalize_dialect(None)


def _read_int(name: str, issues: list[str]) -> int | None:
    try:
        return get_env_int(name, None)
    except ValueError as exc:
        issues.append(str(exc))
        return None


def _read_bool(name: str, issues: list[str]) -> None:
    try:
        get_env_bool(name, None)
    except ValueError as exc:
        issues.append(str(exc))


def validate_configuration() -> None:
    """Validate every ``TSSN_*`` setting and fail with all issues at once.

    Raises:
        RuntimeError: If any setting is malformed or inconsistent.
    """
    issues: list[str] = []

    indent = _read_int("TSSN_INDENT", issues)
    if indent is not None and indent < 0:
        issues.append(f"TSSN_INDENT must be >= 0, got {indent}.")

    type_alignment = _read_int("TSSN_TYPE_ALIGNMENT", issues)
    if type_alignment is not None and type_alignment <= 0:
        issues.append(f"TSSN_TYPE_ALIGNMENT must be > 0, got {type_alignment}.")

    comment_alignment = _read_int("TSSN_COMMENT_ALIGNMENT", issues)
    if comment_alignment is not None and comment_alignment <= 0:
        issues.append(f"TSSN_COMMENT_ALIGNMENT must be > 0, got {comment_alignment}.")

    if (
        type_alignment is not None
        and comment_alignment is not None
        and comment_alignment < type_alignment
    ):
        issues.append(
            "TSSN_COMMENT_ALIGNMENT must not be left of TSSN_TYPE_ALIGNMENT "
            f"({comment_alignment} < {type_alignment})."
        )

    for name in (
        "TSSN_SORT_COLUMNS",
        "TSSN_ALIGN_TYPES",
        "TSSN_SKIP_CONSTRAINTS",
        "TSSN_SKIP_ANNOTATIONS",
    ):
        _read_bool(name, issues)

    try:
        get_default_dialect()
    except ValueError as exc:
        issues.append(f"TSSN_DEFAULT_DIALECT: {exc}")

    if issues:
        for issue in issues:
            logger.error("Configuration issue: %s", issue)
        raise RuntimeError("Invalid tssn configuration:\n- " + "\n- ".join(issues))
