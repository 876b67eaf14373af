"""Dependency Injection container for SimpleCache.

The container manages, all as singletons:
- Settings
- Database location and connection factory
- SQLite storage (the one connection a cache works through)
- Codec, type registry and payload filter
- The bulk-capable object cache
"""

from __future__ import annotations

from dependency_injector import containers, providers

from simplecache.config.loader import load_settings
from simplecache.config.models.settings import Settings
from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.services.codec import MsgPackCodec
from simplecache.services.payload_filters import (
    IdentityFilter,
    PayloadFilter,
    ZlibCompressionFilter,
)
from simplecache.services.sqlite_cache import (
    DatabaseLocator,
    SQLiteConnectionFactory,
    SQLiteStorage,
)
from simplecache.services.type_registry import TypeRegistry


def build_payload_filter(config: Settings) -> PayloadFilter:
    """Select the payload filter configured for the cache."""
    if config.cache.compress_payloads:
        return ZlibCompressionFilter(config.cache.compression_level)
    return IdentityFilter()


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for SimpleCache services.

    Override ``database`` with a path to bypass the application-name
    lookup, or ``config`` with ready-made settings.

    Example:
        >>> container = Container()
        >>> container.config.override(providers.Object(settings))
        >>> cache = container.object_cache()
        >>> cache.insert("alice", person)
        1
        >>> container.object_cache().dispose()
    """

    # Configuration
    config = providers.Singleton(load_settings)

    # Database location
    database = providers.Singleton(
        DatabaseLocator,
        application_name=providers.Callable(lambda config: config.app.name, config=config),
        base_directory=providers.Callable(lambda config: config.cache.directory, config=config),
        filename=providers.Callable(lambda config: config.cache.filename, config=config),
    )

    connection_factory = providers.Singleton(
        SQLiteConnectionFactory,
        database=database,
        journal_mode=providers.Callable(lambda config: config.cache.journal_mode, config=config),
        synchronous=providers.Callable(lambda config: config.cache.synchronous, config=config),
        busy_timeout_seconds=providers.Callable(
            lambda config: config.cache.busy_timeout_seconds,
            config=config,
        ),
    )

    storage = providers.Singleton(
        SQLiteStorage,
        connection_factory=connection_factory,
    )

    # Value handling
    codec = providers.Singleton(MsgPackCodec)
    type_registry = providers.Singleton(TypeRegistry)
    payload_filter = providers.Singleton(build_payload_filter, config=config)

    # Cache
    object_cache = providers.Singleton(
        BulkObjectCache,
        storage=storage,
        codec=codec,
        registry=type_registry,
        payload_filter=payload_filter,
    )
