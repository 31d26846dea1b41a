"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todo_lists.config import ConfigModel, reset_config  # noqa: E402


@pytest.fixture
def session():
    """An empty session mapping, as handed over by the request layer."""
    return {}


@pytest.fixture
def test_config():
    """Configuration with a fixed secret."""
    config = ConfigModel(session_secret="test-secret")
    yield config
    reset_config()
