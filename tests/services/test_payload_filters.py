"""Tests for payload filters."""

from __future__ import annotations

import pytest

from simplecache.services.payload_filters import (
    ChainedFilter,
    IdentityFilter,
    PayloadFilter,
    ZlibCompressionFilter,
)
from simplecache.shared.errors import CacheSerializationError


class ReverseFilter(PayloadFilter):
    def before_write(self, data: bytes) -> bytes:
        return data[::-1]

    def after_read(self, data: bytes) -> bytes:
        return data[::-1]


class TaggingFilter(PayloadFilter):
    def __init__(self, tag: bytes) -> None:
        self.tag = tag

    def before_write(self, data: bytes) -> bytes:
        return data + self.tag

    def after_read(self, data: bytes) -> bytes:
        assert data.endswith(self.tag)
        return data[: -len(self.tag)]


class TestIdentityFilter:
    def test_identity_returns_input(self) -> None:
        payload_filter = IdentityFilter()

        assert payload_filter.before_write(b"abc") == b"abc"
        assert payload_filter.after_read(b"abc") == b"abc"


class TestZlibCompressionFilter:
    """Test zlib compression filter."""

    def test_compresses_repetitive_payload(self) -> None:
        """Repetitive data shrinks and reads back unchanged."""
        # Given
        payload_filter = ZlibCompressionFilter()
        data = b"cache" * 500

        # When
        written = payload_filter.before_write(data)

        # Then
        assert len(written) < len(data)
        assert payload_filter.after_read(written) == data

    def test_corrupt_payload_raises_serialization_error(self) -> None:
        """Bytes that are not zlib data raise CacheSerializationError."""
        with pytest.raises(CacheSerializationError):
            ZlibCompressionFilter().after_read(b"not compressed")

    @pytest.mark.parametrize("level", [0, 10])
    def test_rejects_invalid_level(self, level: int) -> None:
        """Compression level must be 1-9."""
        with pytest.raises(ValueError, match="compression_level"):
            ZlibCompressionFilter(level)


class TestChainedFilter:
    """Test filter composition order."""

    def test_write_in_order_and_read_in_reverse(self) -> None:
        """Filters apply forward on write and backward on read."""
        # Given
        chain = ChainedFilter(TaggingFilter(b"-1"), TaggingFilter(b"-2"))

        # When
        written = chain.before_write(b"data")

        # Then
        assert written == b"data-1-2"
        assert chain.after_read(written) == b"data"

    def test_chain_with_compression(self) -> None:
        """Compression and a byte transform compose."""
        chain = ChainedFilter(ZlibCompressionFilter(), ReverseFilter())
        data = b"payload" * 100

        assert chain.after_read(chain.before_write(data)) == data

    def test_empty_chain_is_identity(self) -> None:
        assert ChainedFilter().before_write(b"x") == b"x"
