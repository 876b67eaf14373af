"""Query operations for SQLite cache.

This module provides read-only lookups over the cache table.
"""

from __future__ import annotations

import logging
from datetime import datetime

from simplecache.services.cache_models import CacheEntry, CacheStats, to_timestamp_us
from simplecache.services.sqlite_cache.operations.base import ENTRY_COLUMNS, BaseOperation
from simplecache.shared.constants import LOG_KEY_PREVIEW_LENGTH, CacheSchema

logger = logging.getLogger(__name__)


class QueryOperations(BaseOperation):
    """Query operations for cache retrieval."""

    def find_by_key(self, key: str) -> CacheEntry | None:
        """Look up the entry stored under ``key``.

        Args:
            key: Cache key identifier

        Returns:
            The entry, or None on a miss
        """
        sql = f"""
        SELECT {ENTRY_COLUMNS}
        FROM {CacheSchema.TABLE}
        WHERE {CacheSchema.COLUMN_KEY} = ?
        """
        row = self.conn.execute(sql, (key,)).fetchone()

        if row is None:
            logger.debug("Cache miss: key=%s", key[:LOG_KEY_PREVIEW_LENGTH])
            return None

        return self._row_to_entry(row)

    def find_by_type(self, type_name: str) -> list[CacheEntry]:
        """Return every entry tagged with ``type_name`` in rowid order.

        Args:
            type_name: Type tag to match

        Returns:
            Matching entries (empty list when none)
        """
        sql = f"""
        SELECT {ENTRY_COLUMNS}
        FROM {CacheSchema.TABLE}
        WHERE {CacheSchema.COLUMN_TYPE_NAME} = ?
        ORDER BY rowid
        """
        rows = self.conn.execute(sql, (type_name,)).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def keys(self, type_name: str | None = None) -> list[str]:
        """List stored keys, optionally restricted to one type tag.

        Args:
            type_name: Type tag to match (None for every key)

        Returns:
            Keys in rowid order
        """
        if type_name is None:
            sql = f"SELECT {CacheSchema.COLUMN_KEY} FROM {CacheSchema.TABLE} ORDER BY rowid"
            cursor = self.conn.execute(sql)
        else:
            sql = f"""
            SELECT {CacheSchema.COLUMN_KEY} FROM {CacheSchema.TABLE}
            WHERE {CacheSchema.COLUMN_TYPE_NAME} = ?
            ORDER BY rowid
            """
            cursor = self.conn.execute(sql, (type_name,))

        return [row[0] for row in cursor.fetchall()]

    def stats(self, now: datetime) -> CacheStats:
        """Collect entry counts and payload size.

        Args:
            now: Reference time for counting expired entries

        Returns:
            CacheStats snapshot
        """
        total_entries, total_size = self.conn.execute(
            f"SELECT COUNT(*), COALESCE(SUM(length({CacheSchema.COLUMN_VALUE})), 0) "
            f"FROM {CacheSchema.TABLE}"
        ).fetchone()

        (expired_entries,) = self.conn.execute(
            f"SELECT COUNT(*) FROM {CacheSchema.TABLE} WHERE {CacheSchema.COLUMN_EXPIRATION} < ?",
            (to_timestamp_us(now),),
        ).fetchone()

        rows = self.conn.execute(
            f"SELECT {CacheSchema.COLUMN_TYPE_NAME}, COUNT(*) FROM {CacheSchema.TABLE} "
            f"GROUP BY {CacheSchema.COLUMN_TYPE_NAME} ORDER BY {CacheSchema.COLUMN_TYPE_NAME}"
        ).fetchall()

        return CacheStats(
            total_entries=total_entries,
            expired_entries=expired_entries,
            total_size_bytes=total_size,
            entries_by_type={type_name: count for type_name, count in rows},
        )
