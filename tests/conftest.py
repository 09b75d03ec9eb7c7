"""
Shared fixtures for the test suite.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment and .env file out of the tests."""
    for key in list(os.environ):
        if key.startswith("FOLDER_ORGANIZER_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "folder_organizer.utils.config_manager.load_dotenv", lambda: False
    )
