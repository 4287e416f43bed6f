"""
Shared test configuration for spanset.

Settings are cached process-wide, so every test starts from a clean cache and
a scrubbed SPANSET_* environment.
"""

import os

import pytest

from spanset.config import get_settings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# SETTINGS ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Run each test without SPANSET_* env vars or stray spanset.yaml files."""
    for key in list(os.environ):
        if key.startswith("SPANSET_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_env(monkeypatch):
    """Set SPANSET_* environment variables and reload settings."""
    def _set(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"SPANSET_{key.upper()}", str(value))
        get_settings.cache_clear()
        return get_settings()
    return _set


# =============================================================================
# SPAN DATA FIXTURES
# =============================================================================


@pytest.fixture
def staggered():
    """Three pairs of spans offset by one, as used across operator tests."""
    return (
        [0, 1, 10, 11, 20, 21],
        [1, 2, 11, 12, 21, 22],
    )


@pytest.fixture
def interleaved():
    """Two span sets that interleave without overlapping."""
    return (
        [0, 1, 2, 3, 4, 5, 6, 7],
        [1, 2, 3, 4, 5, 6, 7, 8],
    )
