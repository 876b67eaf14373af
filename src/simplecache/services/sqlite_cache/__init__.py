"""SQLite cache module with modular operations.

This module provides the SQLite storage backend of the object cache with
separated concerns for connection bootstrapping, schema, query, insert,
and delete operations.
"""

from simplecache.services.sqlite_cache.connection import (
    DatabaseLocator,
    SQLiteConnectionFactory,
    default_data_directory,
)
from simplecache.services.sqlite_cache.storage import ConnectionFactory, SQLiteStorage

__all__ = [
    "ConnectionFactory",
    "DatabaseLocator",
    "SQLiteConnectionFactory",
    "SQLiteStorage",
    "default_data_directory",
]
