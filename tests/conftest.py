# Area: Test Support
"""Shared pytest fixtures."""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees package records in every test."""
    yield
    pkg_logger = logging.getLogger("king_of_hearts")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Strip KOH_* variables and run from an empty directory."""
    for key in list(os.environ):
        if key.startswith("KOH_") or key == "ANTHROPIC_API_KEY":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
