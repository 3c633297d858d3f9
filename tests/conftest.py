"""Pytest configuration and shared fixtures for tui-accordion tests."""

import pytest

import tui_accordion.app.settings
import tui_accordion.io.logging_setup


@pytest.fixture
def clean_logging():
    """Reset the tui_accordion logger before and after a test that configures it."""
    tui_accordion.io.logging_setup.reset()
    yield
    tui_accordion.io.logging_setup.reset()


@pytest.fixture
def no_accordion_env(monkeypatch):
    """Strip TUI_ACCORDION_* variables so settings fall back to defaults."""
    for key in tui_accordion.app.settings.SCHEMA:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
