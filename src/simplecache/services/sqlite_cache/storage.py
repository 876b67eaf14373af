"""SQLite storage backend facade.

This module owns the one connection a cache works through. The
connection is opened lazily on first use, the cache table is ensured
right after, and every access is serialized with a re-entrant lock so
callers on several threads can share one storage object.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable, Generator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, cast

from simplecache.services.cache_models import CacheEntry, CacheStats
from simplecache.services.sqlite_cache.operations.insert import InsertOperations
from simplecache.services.sqlite_cache.operations.query import QueryOperations
from simplecache.services.sqlite_cache.operations.update import UpdateOperations
from simplecache.services.sqlite_cache.schema import SchemaManager
from simplecache.shared.errors import ErrorCode, create_storage_error
from simplecache.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[], sqlite3.Connection]


@dataclass
class _Operations:
    query: QueryOperations
    insert: InsertOperations
    update: UpdateOperations


class SQLiteStorage:
    """Durable table-shaped store behind the object cache.

    Attributes:
        connection_factory: Strategy that opens a new connection

    Example:
        >>> storage = SQLiteStorage(SQLiteConnectionFactory(Path("cache.db3")))
        >>> storage.find_by_key("missing") is None
        True
        >>> storage.close()
    """

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        """Initialize storage without touching the database.

        Args:
            connection_factory: Callable returning an open sqlite3 connection
        """
        self.connection_factory = connection_factory
        self.conn: sqlite3.Connection | None = None
        self._ops: _Operations | None = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        """True while a connection is held."""
        return self.conn is not None

    def open(self) -> sqlite3.Connection:
        """Return the held connection, opening it on first use.

        Raises:
            ApplicationNotConfiguredError: If the database location needs an
                application name that was never set
            InfrastructureError: If the database cannot be opened
        """
        with self._lock:
            if self.conn is None:
                conn = self.connection_factory()
                try:
                    SchemaManager(conn).create_tables()
                except sqlite3.Error as e:
                    conn.close()
                    error = create_storage_error(
                        message=f"Failed to initialize cache table: {e!s}",
                        code=ErrorCode.CACHE_CONNECTION_FAILED,
                        operation="ensure_table",
                        original_error=e,
                    )
                    log_operation_error(logger=logger, error=error)
                    raise error from e

                self.conn = conn
                self._ops = _Operations(
                    query=QueryOperations(conn),
                    insert=InsertOperations(conn),
                    update=UpdateOperations(conn),
                )
                log_operation_success(logger=logger, operation="open_storage", duration_ms=0)
            return self.conn

    @contextmanager
    def _access(self, operation: str, code: ErrorCode) -> Generator[_Operations, None, None]:
        """Hold the lock, make sure the connection is open, wrap sqlite errors."""
        with self._lock:
            self.open()
            try:
                yield cast("_Operations", self._ops)
            except sqlite3.Error as e:
                error = create_storage_error(
                    message=f"Cache storage operation '{operation}' failed: {e!s}",
                    code=code,
                    operation=operation,
                    original_error=e,
                )
                log_operation_error(logger=logger, error=error)
                raise error from e

    def ensure_table(self) -> None:
        """Create the cache table if it does not exist yet."""
        with self._access("ensure_table", ErrorCode.CACHE_WRITE_FAILED) as ops:
            SchemaManager(ops.update.conn).create_tables()

    def find_by_key(self, key: str) -> CacheEntry | None:
        """Point lookup by primary key."""
        with self._access("find_by_key", ErrorCode.CACHE_READ_FAILED) as ops:
            return ops.query.find_by_key(key)

    def find_by_type(self, type_name: str) -> list[CacheEntry]:
        """Return every entry with the given type tag."""
        with self._access("find_by_type", ErrorCode.CACHE_READ_FAILED) as ops:
            return ops.query.find_by_type(type_name)

    def keys(self, type_name: str | None = None) -> list[str]:
        """List stored keys, optionally for one type tag."""
        with self._access("keys", ErrorCode.CACHE_READ_FAILED) as ops:
            return ops.query.keys(type_name)

    def stats(self, now: datetime) -> CacheStats:
        """Aggregate counts and sizes."""
        with self._access("stats", ErrorCode.CACHE_READ_FAILED) as ops:
            return ops.query.stats(now)

    def upsert(self, entry: CacheEntry) -> int:
        """Insert or replace an entry; returns rows affected."""
        with self._access("upsert", ErrorCode.CACHE_WRITE_FAILED) as ops:
            return ops.insert.upsert(entry)

    def delete(self, entry: CacheEntry) -> int:
        """Delete an entry by key; returns rows deleted."""
        with self._access("delete", ErrorCode.CACHE_WRITE_FAILED) as ops:
            return ops.update.delete(entry)

    def delete_where(self, condition: str, parameters: Sequence[Any] = ()) -> int:
        """Delete rows matching a parameterized predicate; returns rows deleted."""
        with self._access("delete_where", ErrorCode.CACHE_WRITE_FAILED) as ops:
            return ops.update.delete_where(condition, parameters)

    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> int:
        """Execute a raw statement; returns rows affected."""
        with self._access("execute", ErrorCode.CACHE_WRITE_FAILED) as ops:
            return ops.update.execute(statement, parameters)

    def close(self) -> None:
        """Close the connection and drop the reference.

        The next operation opens a fresh connection.
        """
        with self._lock:
            if self.conn is not None:
                self.conn.close()
                self.conn = None
                self._ops = None
                logger.debug("Closed SQLite cache connection")
