"""Test fixtures — isolate settings from the developer's environment and .env file."""

import os

import pytest

from sleeponlan.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Drop SLEEPONLAN_* variables, run from an empty dir and reset the settings cache."""
    for key in list(os.environ):
        if key.startswith("SLEEPONLAN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
