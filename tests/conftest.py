"""Shared fixtures for the test suite."""

import os

import pytest

from simple_query_builder.settings import _reload_settings
from simple_query_builder.settings import main as settings_main


def _inlined(expected: str) -> str:
    """Join a multi-line SQL literal into the single-line form the builder renders."""
    return " ".join(line.strip() for line in expected.splitlines() if line.strip())


@pytest.fixture
def inlined():
    return _inlined


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings, unaffected by the host environment."""
    for key in list(os.environ):
        if key.upper().startswith("SQB_"):
            monkeypatch.delenv(key)
    _reload_settings()
    yield
    settings_main._settings = None
