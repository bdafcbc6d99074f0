"""Pytest configuration and shared fixtures for mdmarks tests."""

import logging

import pytest

import mdmarks.io.logging_setup
from mdmarks.config import RenderConfig


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config():
    """Default render configuration."""
    return RenderConfig()


@pytest.fixture
def tmp_settings(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp dir; return the settings file path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path / "mdmarks" / "settings.json"


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_logging():
    """Undo any handler wiring a test installs on the mdmarks logger."""
    yield
    mdmarks.io.logging_setup.reset()
    logging.getLogger("mdmarks").setLevel(logging.NOTSET)
