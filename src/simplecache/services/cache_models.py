"""Cache entry Dataclass models.

This module defines the dataclass persisted by the SQLite object cache
and the helpers that convert its timestamps to and from their stored
integer form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from simplecache.shared.constants import MICROSECONDS_PER_SECOND, NEVER_EXPIRES

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ensure_utc",
    "from_timestamp_us",
    "to_timestamp_us",
    "utc_now",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Make a datetime timezone-aware in UTC.

    Naive datetimes are interpreted as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_timestamp_us(value: datetime) -> int:
    """Convert a datetime to integer microseconds since the Unix epoch."""
    delta = ensure_utc(value) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * MICROSECONDS_PER_SECOND + delta.microseconds


def from_timestamp_us(value: int) -> datetime:
    """Convert integer microseconds since the Unix epoch to a UTC datetime."""
    return _EPOCH + timedelta(microseconds=value)


@dataclass
class CacheEntry:
    """One row of the object cache.

    Attributes:
        key: Cache key, unique across the whole store
        type_name: Type tag of the value's declared type
        value: Serialized payload, already passed through the write filter
        expiration: When the entry becomes eligible for vacuum
            (NEVER_EXPIRES when it never does)
        created_at: When the entry was inserted or last overwritten

    Example:
        >>> entry = CacheEntry(
        ...     key="alice",
        ...     type_name="myapp.models.Person",
        ...     value=b"\\x82\\xa4name\\xa4john\\xa3age\\x13",
        ...     created_at=utc_now(),
        ... )
        >>> entry.never_expires
        True
    """

    key: str
    type_name: str
    value: bytes
    created_at: datetime
    expiration: datetime = NEVER_EXPIRES

    def __post_init__(self) -> None:
        """Validate fields and normalize timestamps to UTC.

        Raises:
            ValueError: If key or type_name is empty
        """
        if not self.key:
            msg = "key must be non-empty"
            raise ValueError(msg)

        if not self.type_name:
            msg = "type_name must be non-empty"
            raise ValueError(msg)

        self.created_at = ensure_utc(self.created_at)
        self.expiration = ensure_utc(self.expiration)

    @property
    def never_expires(self) -> bool:
        """True when the entry carries the infinite expiration sentinel."""
        return self.expiration == NEVER_EXPIRES

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        return len(self.value)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the entry's expiration is strictly before ``now``.

        Only vacuum acts on this; reads return expired entries as usual.
        """
        return self.expiration < ensure_utc(now or utc_now())


@dataclass
class CacheStats:
    """Aggregate figures about the cache contents.

    Attributes:
        total_entries: Number of stored entries
        expired_entries: Entries a vacuum would delete right now
        total_size_bytes: Sum of payload sizes
        entries_by_type: Entry count per type tag
    """

    total_entries: int = 0
    expired_entries: int = 0
    total_size_bytes: int = 0
    entries_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def valid_entries(self) -> int:
        """Entries that are not yet expired."""
        return self.total_entries - self.expired_entries
