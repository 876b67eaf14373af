"""Base operation class for SQLite cache operations.

This module provides shared functionality for all cache operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from simplecache.services.cache_models import CacheEntry, from_timestamp_us
from simplecache.shared.constants import CacheSchema

if TYPE_CHECKING:
    import sqlite3

logger = logging.getLogger(__name__)

# Column order used by every SELECT that rebuilds a CacheEntry
ENTRY_COLUMNS = ", ".join(
    (
        CacheSchema.COLUMN_KEY,
        CacheSchema.COLUMN_TYPE_NAME,
        CacheSchema.COLUMN_VALUE,
        CacheSchema.COLUMN_EXPIRATION,
        CacheSchema.COLUMN_CREATED_AT,
    )
)


class BaseOperation:
    """Base class for cache operations with shared functionality."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize base operation.

        Args:
            conn: SQLite database connection
        """
        self.conn = conn

    @staticmethod
    def _row_to_entry(row: tuple[Any, ...]) -> CacheEntry:
        """Build a CacheEntry from a row selected with ENTRY_COLUMNS."""
        key, type_name, value, expiration, created_at = row
        return CacheEntry(
            key=key,
            type_name=type_name,
            value=bytes(value),
            expiration=from_timestamp_us(expiration),
            created_at=from_timestamp_us(created_at),
        )
