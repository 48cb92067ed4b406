"""Pytest hooks and fixtures."""

import os

import pytest

from miru.config.access import clear_config_cache


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "slow: spawns a backend subprocess",
    )


def pytest_collection_modifyitems(config, items):
    """Skip subprocess tests when MIRU_SKIP_SLOW=1."""
    if os.environ.get("MIRU_SKIP_SLOW") != "1":
        return
    skip = pytest.mark.skip(reason="Spawns a backend subprocess (MIRU_SKIP_SLOW=1)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so config and log files stay out of the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    clear_config_cache()
    yield tmp_path
    clear_config_cache()
