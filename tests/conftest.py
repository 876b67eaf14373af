"""
Pytest configuration and shared fixtures for SimpleCache tests.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from simplecache.cli.common.context import clear_cli_context
from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.services.sqlite_cache import SQLiteConnectionFactory, SQLiteStorage


@pytest.fixture(autouse=True)
def _reset_package_logging() -> Generator[None, None, None]:
    """Undo CLI logger setup so records keep propagating between tests."""
    yield
    package_logger = logging.getLogger("simplecache")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    clear_cli_context()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh cache database file."""
    return tmp_path / "cache" / "cache.db3"


@pytest.fixture
def storage(db_path: Path) -> Generator[SQLiteStorage, None, None]:
    """Storage over a temporary database."""
    sqlite_storage = SQLiteStorage(SQLiteConnectionFactory(db_path))
    yield sqlite_storage
    sqlite_storage.close()


@pytest.fixture
def cache(storage: SQLiteStorage) -> Generator[BulkObjectCache, None, None]:
    """Bulk-capable object cache over a temporary database."""
    object_cache = BulkObjectCache(storage)
    yield object_cache
    object_cache.dispose()
