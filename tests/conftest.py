"""Pytest configuration and fixtures for structured tests."""

import os

import pytest

from structured.config import StructuredSettings, set_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test against default settings and restore them afterwards."""
    previous = set_settings(StructuredSettings())
    yield
    set_settings(previous)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove STRUCTURED_* variables so environment overrides start empty."""
    for key in list(os.environ):
        if key.startswith("STRUCTURED_"):
            monkeypatch.delenv(key)
    return monkeypatch
