"""Tests for cache entry models and timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from simplecache.services.cache_models import (
    CacheEntry,
    CacheStats,
    ensure_utc,
    from_timestamp_us,
    to_timestamp_us,
    utc_now,
)
from simplecache.shared.constants import NEVER_EXPIRES


class TestTimestamps:
    """Test integer microsecond timestamps."""

    def test_epoch_is_zero(self) -> None:
        assert to_timestamp_us(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0

    def test_microsecond_precision_is_kept(self) -> None:
        value = datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)

        assert from_timestamp_us(to_timestamp_us(value)) == value

    def test_never_expires_sentinel_survives_storage_form(self) -> None:
        assert from_timestamp_us(to_timestamp_us(NEVER_EXPIRES)) == NEVER_EXPIRES

    def test_timestamps_order_like_datetimes(self) -> None:
        earlier = utc_now()
        later = earlier + timedelta(microseconds=1)

        assert to_timestamp_us(earlier) < to_timestamp_us(later)

    def test_ensure_utc_converts_other_zones(self) -> None:
        """Aware datetimes are converted, naive ones are labelled UTC."""
        plus_two = timezone(timedelta(hours=2))

        assert ensure_utc(datetime(2024, 1, 1, 12, tzinfo=plus_two)) == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)
        assert ensure_utc(datetime(2024, 1, 1, 12)).tzinfo == timezone.utc


class TestCacheEntry:
    """Test CacheEntry validation."""

    def test_rejects_empty_key(self) -> None:
        with pytest.raises(ValueError, match="key"):
            CacheEntry(key="", type_name="t", value=b"", created_at=utc_now())

    def test_rejects_empty_type_name(self) -> None:
        with pytest.raises(ValueError, match="type_name"):
            CacheEntry(key="k", type_name="", value=b"", created_at=utc_now())

    def test_defaults_to_never_expires(self) -> None:
        entry = CacheEntry(key="k", type_name="t", value=b"abc", created_at=utc_now())

        assert entry.never_expires
        assert entry.size == 3
        assert not entry.is_expired()

    def test_is_expired_is_strict(self) -> None:
        """An entry expiring exactly now is not yet expired."""
        now = utc_now()
        entry = CacheEntry(key="k", type_name="t", value=b"", created_at=now, expiration=now)

        assert not entry.is_expired(now)
        assert entry.is_expired(now + timedelta(microseconds=1))


class TestCacheStats:
    def test_valid_entries(self) -> None:
        stats = CacheStats(total_entries=5, expired_entries=2)

        assert stats.valid_entries == 3
        assert stats.entries_by_type == {}
