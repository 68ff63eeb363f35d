"""Root conftest — shared test configuration."""

import os

import pytest

# Ensure tests never reach a real cluster
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:1")
os.environ.setdefault("DB_NAME", "users_test")

import users_api.infrastructure.database as db_module  # noqa: E402
from users_api.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_process_state():
    """Each test starts without a cached connection or cached settings."""
    get_settings.cache_clear()
    db_module.db_manager = None
    yield
    get_settings.cache_clear()
    db_module.db_manager = None
