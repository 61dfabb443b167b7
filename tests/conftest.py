"""Pytest configuration and fixtures."""

import pytest

from shortlink.database.sqlite import SQLiteLinkStore
from shortlink.service import ShortenerService, RedirectorService
from shortlink.common.logging_config import setup_logging


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh database file."""
    return str(tmp_path / "short-links.db")


@pytest.fixture
def test_store(db_path, logger):
    """Create test store instance."""
    store = SQLiteLinkStore(db_path=db_path, logger=logger)

    yield store

    store.close()


@pytest.fixture
def shortener(test_store, logger) -> ShortenerService:
    """Create shortener service."""
    return ShortenerService(test_store, logger=logger)


@pytest.fixture
def redirector(test_store, logger) -> RedirectorService:
    """Create redirector service."""
    return RedirectorService(test_store, logger=logger)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
