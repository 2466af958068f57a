"""Shared test fixtures and configuration.

Pins the window settings BEFORE any src imports so a developer's .env
can't change expected windows, and provides a mocked slot store.
"""

import os

os.environ["SLOT_LEAD_MINUTES"] = "30"
os.environ["SLOT_GRANULARITY_MINUTES"] = "15"
os.environ["SLOT_DURATION_MINUTES"] = "120"
os.environ["SLOT_MERGE_TOLERANCE_MINUTES"] = "15"
os.environ.setdefault("LOG_LEVEL", "INFO")

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def slot_store():
    """Return a SlotStore double with an empty poll."""
    store = MagicMock()
    store.list_slots = AsyncMock(return_value=[])
    store.add_slots = AsyncMock(return_value=[])
    store.remove_slots = AsyncMock(return_value=None)
    return store


@pytest.fixture
def hour_long_windows(monkeypatch):
    """Reload settings with SLOT_DURATION_MINUTES=60 from the environment."""
    import src.config as config

    monkeypatch.setenv("SLOT_DURATION_MINUTES", "60")
    monkeypatch.setattr(config, "settings", config._load_settings())
    return config.settings
