"""Schema manager for the SQLite object cache.

This module creates the single cache table and its indexes.
"""

from __future__ import annotations

import logging
import sqlite3

from simplecache.shared.constants import CacheSchema

logger = logging.getLogger(__name__)


class SchemaManager:
    """Creates the cache table and its indexes."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize schema manager.

        Args:
            conn: SQLite database connection
        """
        self.conn = conn

    def create_tables(self) -> None:
        """Create the cache table and indexes if they do not exist."""
        schema_sql = f"""
        CREATE TABLE IF NOT EXISTS {CacheSchema.TABLE} (
            {CacheSchema.COLUMN_KEY} TEXT PRIMARY KEY NOT NULL,
            {CacheSchema.COLUMN_TYPE_NAME} TEXT NOT NULL,
            {CacheSchema.COLUMN_VALUE} BLOB NOT NULL,

            -- Microseconds since the Unix epoch (UTC)
            {CacheSchema.COLUMN_EXPIRATION} INTEGER NOT NULL,
            {CacheSchema.COLUMN_CREATED_AT} INTEGER NOT NULL,

            CHECK (length({CacheSchema.COLUMN_KEY}) > 0),
            CHECK (length({CacheSchema.COLUMN_TYPE_NAME}) > 0)
        );

        CREATE INDEX IF NOT EXISTS {CacheSchema.INDEX_TYPE_NAME}
            ON {CacheSchema.TABLE}({CacheSchema.COLUMN_TYPE_NAME});
        CREATE INDEX IF NOT EXISTS {CacheSchema.INDEX_EXPIRATION}
            ON {CacheSchema.TABLE}({CacheSchema.COLUMN_EXPIRATION});
        """

        self.conn.executescript(schema_sql)

        logger.debug("Ensured cache table '%s'", CacheSchema.TABLE)
