"""SQLite cache operations module.

This module provides separate operation classes for querying, inserting,
and deleting cache entries.
"""

from simplecache.services.sqlite_cache.operations.insert import InsertOperations
from simplecache.services.sqlite_cache.operations.query import QueryOperations
from simplecache.services.sqlite_cache.operations.update import UpdateOperations

__all__ = ["InsertOperations", "QueryOperations", "UpdateOperations"]
