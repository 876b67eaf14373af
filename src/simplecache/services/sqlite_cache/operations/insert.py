"""Insert operations for SQLite cache.

This module provides insert operations for storing cache entries.
"""

from __future__ import annotations

import logging

from simplecache.services.cache_models import CacheEntry, to_timestamp_us
from simplecache.services.sqlite_cache.operations.base import ENTRY_COLUMNS, BaseOperation
from simplecache.shared.constants import LOG_KEY_PREVIEW_LENGTH, CacheSchema

logger = logging.getLogger(__name__)


class InsertOperations(BaseOperation):
    """Insert operations for cache storage."""

    def upsert(self, entry: CacheEntry) -> int:
        """Insert an entry, replacing any row with the same key.

        Args:
            entry: Entry to store

        Returns:
            Number of rows affected (1)
        """
        insert_sql = f"""
        INSERT OR REPLACE INTO {CacheSchema.TABLE} ({ENTRY_COLUMNS})
        VALUES (?, ?, ?, ?, ?)
        """

        cursor = self.conn.execute(
            insert_sql,
            (
                entry.key,
                entry.type_name,
                entry.value,
                to_timestamp_us(entry.expiration),
                to_timestamp_us(entry.created_at),
            ),
        )

        logger.debug(
            "Cache upserted: key=%s, type=%s, size=%d bytes, expiration=%s",
            entry.key[:LOG_KEY_PREVIEW_LENGTH],
            entry.type_name,
            entry.size,
            "never" if entry.never_expires else entry.expiration.isoformat(),
        )

        return cursor.rowcount
