"""
Object Cache Engine

Single-key operations of the persistent object cache: get, insert,
invalidate, type-scoped get/invalidate, and the expiration sweep.

Storage Strategy:
- One row per key in a flat namespace shared by every value type
- Each row is tagged with the value's declared type, used by the
  type-scoped operations and by the safety check in ``invalidate``
- Expiration is enforced by ``vacuum`` only; reads never filter on it
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from types import TracebackType
from typing import Any, TypeVar

from simplecache.services.cache_models import (
    CacheEntry,
    CacheStats,
    ensure_utc,
    to_timestamp_us,
    utc_now,
)
from simplecache.services.codec import MsgPackCodec
from simplecache.services.payload_filters import IdentityFilter, PayloadFilter
from simplecache.services.sqlite_cache.storage import SQLiteStorage
from simplecache.services.type_registry import TypeRegistry
from simplecache.shared.constants import (
    LOG_KEY_PREVIEW_LENGTH,
    NEVER_EXPIRES,
    CacheConditions,
)
from simplecache.shared.errors import (
    InvalidKeyError,
    KeyNotFoundError,
    TypeMismatchError,
)
from simplecache.shared.logging import log_operation_start, log_operation_success

logger = logging.getLogger(__name__)

T = TypeVar("T")

Expiration = datetime | timedelta | None


def _preview(key: str) -> str:
    return key[:LOG_KEY_PREVIEW_LENGTH]


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class ObjectCache:
    """Persistent, type-tagged key-value object cache.

    Args:
        storage: Storage backend holding the cache table
        codec: Value codec (MessagePack by default)
        registry: Type tag registry (a private one by default)
        payload_filter: Byte filter applied before write and after read

    Example:
        >>> cache = ObjectCache(SQLiteStorage(SQLiteConnectionFactory(path)))
        >>> cache.insert("alice", Person(name="john", age=19))
        1
        >>> cache.get("alice", Person)
        Person(name='john', age=19)
    """

    def __init__(
        self,
        storage: SQLiteStorage,
        codec: MsgPackCodec | None = None,
        registry: TypeRegistry | None = None,
        payload_filter: PayloadFilter | None = None,
    ) -> None:
        self.storage = storage
        self.codec = codec or MsgPackCodec()
        self.registry = registry or TypeRegistry()
        self.payload_filter = payload_filter or IdentityFilter()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str, value_type: type[T] | Any) -> T:
        """Return the value stored under ``key`` as ``value_type``.

        The stored type tag is not checked.

        Raises:
            InvalidKeyError: If key is empty
            KeyNotFoundError: If no entry exists for key
            CacheSerializationError: If the payload does not decode as value_type
        """
        self._validate_key(key, "get")
        entry = self.storage.find_by_key(key)
        if entry is None:
            raise KeyNotFoundError(key, operation="get")
        return self._decode(entry, value_type)

    def get_created_at(self, key: str) -> datetime | None:
        """Return when ``key`` was inserted, or None if it is absent."""
        self._validate_key(key, "get_created_at")
        entry = self.storage.find_by_key(key)
        if entry is None:
            return None
        return entry.created_at

    def get_all(self, value_type: type[T] | Any) -> list[T]:
        """Return every value stored under the tag of ``value_type``."""
        start = time.perf_counter()
        type_name = self.registry.tag_for(value_type)
        log_operation_start(logger, "get_all", {"type_name": type_name})

        values = [self._decode(entry, value_type) for entry in self.storage.find_by_type(type_name)]

        log_operation_success(
            logger,
            "get_all",
            _elapsed_ms(start),
            result_info={"count": len(values)},
            context={"type_name": type_name},
        )
        return values

    def get_all_keys(self, value_type: Any | None = None) -> list[str]:
        """List stored keys, optionally only those tagged with ``value_type``."""
        type_name = self.registry.tag_for(value_type) if value_type is not None else None
        return self.storage.keys(type_name)

    def stats(self) -> CacheStats:
        """Return entry counts and payload size."""
        return self.storage.stats(utc_now())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(
        self,
        key: str,
        value: Any,
        value_type: Any | None = None,
        *,
        expiration: Expiration = None,
    ) -> int:
        """Store ``value`` under ``key``, replacing any previous entry.

        Args:
            key: Cache key
            value: Value to store
            value_type: Declared type; defaults to ``type(value)``
            expiration: Absolute datetime, or a timedelta from now; never
                expires when omitted or when the timedelta reaches past the
                largest representable datetime

        Returns:
            Rows affected (1)

        Raises:
            InvalidKeyError: If key is empty
            CacheSerializationError: If the value cannot be encoded
        """
        self._validate_key(key, "insert")
        start = time.perf_counter()

        declared_type = value_type if value_type is not None else type(value)
        now = utc_now()
        payload = self.codec.serialize(value, declared_type)
        entry = CacheEntry(
            key=key,
            type_name=self.registry.tag_for(declared_type),
            value=self.payload_filter.before_write(payload),
            created_at=now,
            expiration=self._resolve_expiration(expiration, now),
        )
        self.storage.upsert(entry)

        log_operation_success(
            logger,
            "insert",
            _elapsed_ms(start),
            result_info={"size_bytes": entry.size},
            context={"key": _preview(key), "type_name": entry.type_name},
        )
        return 1

    def invalidate(self, key: str, value_type: type[T] | Any) -> int:
        """Delete ``key`` if it is stored under the tag of ``value_type``.

        Returns:
            Rows deleted (1)

        Raises:
            InvalidKeyError: If key is empty
            KeyNotFoundError: If no entry exists for key
            TypeMismatchError: If the entry has another type tag; it is
                left untouched
        """
        self._validate_key(key, "invalidate")
        entry = self.storage.find_by_key(key)
        if entry is None:
            raise KeyNotFoundError(key, operation="invalidate")

        expected = self.registry.tag_for(value_type)
        if entry.type_name != expected:
            raise TypeMismatchError(
                key,
                expected=expected,
                actual=entry.type_name,
                operation="invalidate",
            )

        deleted = self.storage.delete(entry)
        logger.debug("Invalidated cache key: %s", _preview(key))
        return deleted

    def invalidate_all(self, value_type: type[T] | Any) -> int:
        """Delete every entry tagged with ``value_type``; returns the count."""
        return self.invalidate_tag(self.registry.tag_for(value_type))

    def invalidate_tag(self, type_name: str) -> int:
        """Delete every entry carrying the raw type tag ``type_name``."""
        deleted = self.storage.delete_where(CacheConditions.TYPE_NAME_EQUALS, (type_name,))
        if deleted:
            logger.info("Invalidated %d cache entries of type %s", deleted, type_name)
        return deleted

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def vacuum(self) -> int:
        """Delete entries whose expiration is before now, then compact.

        Returns:
            Number of expired entries deleted
        """
        start = time.perf_counter()
        log_operation_start(logger, "vacuum")

        now_us = to_timestamp_us(utc_now())
        deleted = self.storage.delete_where(CacheConditions.EXPIRED_BEFORE, (now_us,))
        self.storage.execute("VACUUM")

        if deleted:
            logger.info("Vacuum removed %d expired cache entries", deleted)
        log_operation_success(
            logger,
            "vacuum",
            _elapsed_ms(start),
            result_info={"deleted": deleted},
        )
        return deleted

    def flush(self) -> None:
        """Checkpoint the write-ahead log into the main database file."""
        self.storage.execute("PRAGMA wal_checkpoint(FULL)")

    def dispose(self) -> None:
        """Close the storage connection. Later calls reopen it."""
        self.storage.close()

    close = dispose

    def __enter__(self) -> ObjectCache:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _decode(self, entry: CacheEntry, value_type: type[T] | Any) -> T:
        payload = self.payload_filter.after_read(entry.value)
        return self.codec.deserialize(payload, value_type)

    @staticmethod
    def _validate_key(key: str | None, operation: str) -> None:
        if not key or not isinstance(key, str):
            raise InvalidKeyError(operation=operation)

    @staticmethod
    def _resolve_expiration(expiration: Expiration, now: datetime) -> datetime:
        if expiration is None:
            return NEVER_EXPIRES
        if isinstance(expiration, timedelta):
            try:
                return now + expiration
            except OverflowError:
                # Outside the datetime range
                if expiration > timedelta(0):
                    return NEVER_EXPIRES
                return datetime.min.replace(tzinfo=timezone.utc)
        return ensure_utc(expiration)
