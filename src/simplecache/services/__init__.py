"""SimpleCache services.

The object cache engine, its bulk variant, and the codec, filter and type
registry strategies it is composed from.
"""

from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.services.cache_models import CacheEntry, CacheStats
from simplecache.services.codec import MsgPackCodec
from simplecache.services.object_cache import ObjectCache
from simplecache.services.payload_filters import (
    ChainedFilter,
    IdentityFilter,
    PayloadFilter,
    ZlibCompressionFilter,
)
from simplecache.services.sqlite_cache import (
    DatabaseLocator,
    SQLiteConnectionFactory,
    SQLiteStorage,
)
from simplecache.services.type_registry import TypeRegistry, canonical_type_name

__all__ = [
    "BulkObjectCache",
    "CacheEntry",
    "CacheStats",
    "ChainedFilter",
    "DatabaseLocator",
    "IdentityFilter",
    "MsgPackCodec",
    "ObjectCache",
    "PayloadFilter",
    "SQLiteConnectionFactory",
    "SQLiteStorage",
    "TypeRegistry",
    "ZlibCompressionFilter",
    "canonical_type_name",
]
