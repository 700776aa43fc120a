"""Unit test environment helpers."""

import os

import pytest


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Clear TSSN_* settings so each test starts from the built-in defaults."""
    for key in list(os.environ):
        if key.startswith("TSSN_"):
            monkeypatch.delenv(key, raising=False)
    yield
