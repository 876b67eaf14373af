"""Tests for BulkObjectCache multi-key operations."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.shared.constants import LOG_KEY_PREVIEW_LENGTH
from simplecache.shared.errors import InvalidKeyError, KeyNotFoundError, TypeMismatchError
from tests.helpers import Address, Person


class TestGetMany:
    """Test bulk get."""

    def test_get_many_omits_missing_keys(self, cache: BulkObjectCache) -> None:
        """Only present keys appear in the result."""
        # Given
        p1 = Person(name="john", age=19)
        p2 = Person(name="mike", age=30)
        cache.insert_many({"k1": p1, "k2": p2})

        # When
        result = cache.get_many(["k1", "k2", "bad"], Person)

        # Then
        assert result == {"k1": p1, "k2": p2}

    def test_get_many_with_no_keys_returns_empty(self, cache: BulkObjectCache) -> None:
        """An empty key list gives an empty mapping."""
        assert cache.get_many([], Person) == {}

    def test_get_many_propagates_invalid_key(self, cache: BulkObjectCache) -> None:
        """Only KeyNotFoundError is folded into the result."""
        with pytest.raises(InvalidKeyError):
            cache.get_many(["ok", ""], Person)


class TestInsertMany:
    """Test bulk insert."""

    def test_insert_many_returns_pair_count(self, cache: BulkObjectCache) -> None:
        """Bulk insert returns the number of pairs and stores all of them."""
        # Given
        pairs = {f"k{index}": Person(name=f"p{index}", age=index) for index in range(5)}

        # When
        inserted = cache.insert_many(pairs)

        # Then
        assert inserted == 5
        assert cache.get_many(list(pairs), Person) == pairs

    def test_insert_many_accepts_pairs(self, cache: BulkObjectCache) -> None:
        """An iterable of (key, value) tuples works like a mapping."""
        # When
        inserted = cache.insert_many([("a1", Address(street="x")), ("a2", Address(street="y"))])

        # Then
        assert inserted == 2
        assert [address.street for address in cache.get_all(Address)] == ["x", "y"]

    def test_insert_many_applies_expiration_to_every_item(self, cache: BulkObjectCache) -> None:
        """The shared expiration is used for each insert."""
        # Given
        cache.insert_many({"k1": Person(name="a", age=1), "k2": Person(name="b", age=2)}, expiration=timedelta(seconds=-1))

        # When
        deleted = cache.vacuum()

        # Then
        assert deleted == 2

    def test_insert_many_is_not_transactional(self, cache: BulkObjectCache) -> None:
        """Items before a failing item stay committed."""
        # When
        with pytest.raises(InvalidKeyError):
            cache.insert_many([("k1", Person(name="a", age=1)), ("", Person(name="b", age=2))])

        # Then
        assert cache.get("k1", Person).name == "a"


class TestInvalidateMany:
    """Test bulk invalidate."""

    def test_invalidate_many_skips_missing_keys(self, cache: BulkObjectCache) -> None:
        """Missing keys are swallowed and not counted."""
        # Given
        cache.insert_many({"k1": Person(name="a", age=1), "k2": Person(name="b", age=2)})

        # When
        deleted = cache.invalidate_many(["k1", "missing", "k2"], Person)

        # Then
        assert deleted == 2
        assert cache.get_all_keys() == []

    def test_invalidate_many_aborts_on_type_mismatch(self, cache: BulkObjectCache) -> None:
        """A type mismatch propagates, earlier deletions stay, later keys are untouched."""
        # Given
        cache.insert("k1", Person(name="a", age=1))
        cache.insert("a1", Address(street="x"))
        cache.insert("k2", Person(name="b", age=2))

        # When
        with pytest.raises(TypeMismatchError):
            cache.invalidate_many(["k1", "a1", "k2"], Person)

        # Then
        with pytest.raises(KeyNotFoundError):
            cache.get("k1", Person)
        assert cache.get("a1", Address).street == "x"
        assert cache.get("k2", Person).name == "b"

    def test_invalidate_many_logs_truncated_missing_key(
        self, cache: BulkObjectCache, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Skipped keys are logged by their preview only."""
        # Given
        long_key = "k" * (LOG_KEY_PREVIEW_LENGTH + 20)

        # When
        with caplog.at_level(logging.DEBUG, logger="simplecache.services.bulk_cache"):
            cache.invalidate_many([long_key], Person)

        # Then
        skipped = [r for r in caplog.records if "bulk invalidate" in r.getMessage()]
        assert len(skipped) == 1
        assert long_key not in skipped[0].getMessage()
        assert long_key[:LOG_KEY_PREVIEW_LENGTH] in skipped[0].getMessage()


class TestGetCreatedAtMany:
    """Test bulk created-at lookup."""

    def test_get_created_at_many_includes_every_key(self, cache: BulkObjectCache) -> None:
        """Absent keys map to None."""
        # Given
        cache.insert("k1", Person(name="a", age=1))

        # When
        result = cache.get_created_at_many(["k1", "missing"])

        # Then
        assert list(result) == ["k1", "missing"]
        assert result["k1"] is not None
        assert result["missing"] is None
