"""Update operations for SQLite cache.

This module provides delete and raw-statement operations for cache
management.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from simplecache.services.cache_models import CacheEntry
from simplecache.services.sqlite_cache.operations.base import BaseOperation
from simplecache.shared.constants import LOG_KEY_PREVIEW_LENGTH, CacheSchema

logger = logging.getLogger(__name__)


class UpdateOperations(BaseOperation):
    """Update/delete operations for cache management."""

    def delete(self, entry: CacheEntry) -> int:
        """Delete an entry by its primary key.

        Args:
            entry: Entry to delete

        Returns:
            Number of rows deleted
        """
        delete_sql = f"DELETE FROM {CacheSchema.TABLE} WHERE {CacheSchema.COLUMN_KEY} = ?"
        cursor = self.conn.execute(delete_sql, (entry.key,))

        deleted_count = cursor.rowcount
        if deleted_count > 0:
            logger.debug(
                "Cache deleted: key=%s, type=%s",
                entry.key[:LOG_KEY_PREVIEW_LENGTH],
                entry.type_name,
            )

        return deleted_count

    def delete_where(self, condition: str, parameters: Sequence[Any] = ()) -> int:
        """Delete every row matching a parameterized predicate.

        Args:
            condition: SQL boolean expression with ``?`` placeholders,
                e.g. ``CacheConditions.TYPE_NAME_EQUALS``
            parameters: Values bound to the placeholders

        Returns:
            Number of rows deleted

        Raises:
            ValueError: If condition is empty
        """
        if not condition.strip():
            msg = "delete_where requires a non-empty condition"
            raise ValueError(msg)

        delete_sql = f"DELETE FROM {CacheSchema.TABLE} WHERE {condition}"
        cursor = self.conn.execute(delete_sql, tuple(parameters))

        return cursor.rowcount

    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> int:
        """Execute a raw statement.

        Args:
            statement: SQL statement (e.g. ``VACUUM``)
            parameters: Values bound to placeholders

        Returns:
            Number of rows affected (0 for statements that report none)
        """
        cursor = self.conn.execute(statement, tuple(parameters))
        return max(cursor.rowcount, 0)
