"""Pytest configuration and fixtures."""

import os

import pytest

from tedos.core.config import get_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["TEDOS_ENV"] = "test"
    os.environ["MERGE_LOG_CHUNK_KEYS"] = "true"
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
