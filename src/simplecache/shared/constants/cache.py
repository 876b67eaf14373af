"""
Cache Storage Constants

Table layout, file naming, and timestamp encoding used by the SQLite
object cache.
"""

from datetime import datetime, timezone

# Microseconds per second, timestamps are stored as integer microseconds
MICROSECONDS_PER_SECOND = 1_000_000

# Longest key prefix written to log lines
LOG_KEY_PREVIEW_LENGTH = 50


class CacheSchema:
    """Names of the cache table, its columns and indexes."""

    TABLE = "cache_element"

    COLUMN_KEY = "key"
    COLUMN_TYPE_NAME = "type_name"
    COLUMN_VALUE = "value"
    COLUMN_EXPIRATION = "expiration"
    COLUMN_CREATED_AT = "created_at"

    INDEX_TYPE_NAME = "idx_cache_element_type_name"
    INDEX_EXPIRATION = "idx_cache_element_expiration"


class CacheConditions:
    """Parameterized predicates accepted by ``SQLiteStorage.delete_where``."""

    TYPE_NAME_EQUALS = "type_name = ?"
    EXPIRED_BEFORE = "expiration < ?"


class CacheLocation:
    """Default on-disk location of the cache database."""

    FOLDER_NAME = "SimpleCache"
    FILENAME = "cache.db3"
    WINDOWS_DATA_ENV = "APPDATA"
    XDG_DATA_ENV = "XDG_DATA_HOME"
    MACOS_DATA_DIR = "Library/Application Support"
    UNIX_DATA_DIR = ".local/share"


class CacheDefaults:
    """Connection defaults."""

    JOURNAL_MODE = "WAL"
    SYNCHRONOUS = "NORMAL"
    BUSY_TIMEOUT_SECONDS = 5.0
    COMPRESSION_LEVEL = 6


# "Never expires" sentinel
NEVER_EXPIRES = datetime.max.replace(tzinfo=timezone.utc)
