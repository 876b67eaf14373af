"""
SimpleCache - Persistent Object Cache

A durable, type-tagged key-value store for arbitrary serializable values,
backed by a single SQLite table, with optional expiration and bulk access.
"""

__version__ = "0.1.0"

from .services import (
    BulkObjectCache,
    DatabaseLocator,
    MsgPackCodec,
    ObjectCache,
    SQLiteConnectionFactory,
    SQLiteStorage,
    TypeRegistry,
)
from .shared.constants import NEVER_EXPIRES

__all__ = [
    "NEVER_EXPIRES",
    "BulkObjectCache",
    "DatabaseLocator",
    "MsgPackCodec",
    "ObjectCache",
    "SQLiteConnectionFactory",
    "SQLiteStorage",
    "TypeRegistry",
]
