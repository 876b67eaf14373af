"""Tests for MsgPackCodec."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

import msgpack
import pytest

from simplecache.services.codec import MsgPackCodec
from simplecache.shared.errors import CacheSerializationError, ErrorCode
from tests.helpers import Address, Blob, Person


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


class TestMsgPackCodec:
    """Test value encoding and decoding."""

    def test_serialize_produces_msgpack(self) -> None:
        """Payloads are plain MessagePack documents."""
        # Given
        codec = MsgPackCodec()

        # When
        payload = codec.serialize(Person(name="john", age=19), Person)

        # Then
        assert msgpack.unpackb(payload, raw=False) == {"name": "john", "age": 19}

    @pytest.mark.parametrize(
        ("value", "value_type"),
        [
            (Person(name="john", age=19), Person),
            (Address(street="Hollywood", number=7), Address),
            ({"a": [1, 2], "b": []}, dict[str, list[int]]),
            (datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc), datetime),
            (Color.BLUE, Color),
            ("text", str),
            (None, type(None)),
        ],
    )
    def test_supported_values(self, value: object, value_type: object) -> None:
        """Structured values decode back to equal values."""
        codec = MsgPackCodec()

        assert codec.deserialize(codec.serialize(value, value_type), value_type) == value

    def test_deserialize_corrupt_payload_raises(self) -> None:
        """Truncated data is reported as a serialization error."""
        # Given
        codec = MsgPackCodec()
        payload = codec.serialize(Person(name="john", age=19), Person)

        # When / Then
        with pytest.raises(CacheSerializationError) as exc_info:
            codec.deserialize(payload[:5], Person)

        assert exc_info.value.code == ErrorCode.CACHE_SERIALIZATION_ERROR

    def test_deserialize_wrong_shape_raises(self) -> None:
        """Data that does not validate as the type raises."""
        codec = MsgPackCodec()
        payload = codec.serialize([1, 2, 3], list[int])

        with pytest.raises(CacheSerializationError):
            codec.deserialize(payload, Person)

    def test_serialize_unsupported_value_raises(self) -> None:
        """Values with no plain-data form raise."""
        codec = MsgPackCodec()

        with pytest.raises(CacheSerializationError):
            codec.serialize(object(), object)

    @pytest.mark.parametrize(
        ("value", "value_type"),
        [
            (b"\xff\x00\x81", bytes),
            (Blob(name="logo", data=b"\x89PNG\r\n\x1a\n\xff"), Blob),
            ({1: "one", 2: "two"}, dict[int, str]),
        ],
    )
    def test_binary_and_non_string_keys_round_trip(self, value: object, value_type: object) -> None:
        """Arbitrary bytes and integer map keys survive encoding."""
        codec = MsgPackCodec()

        assert codec.deserialize(codec.serialize(value, value_type), value_type) == value

    def test_bytes_are_packed_as_msgpack_bin(self) -> None:
        """Binary fields use the native bin type, not text."""
        # Given
        codec = MsgPackCodec()

        # When
        payload = codec.serialize(Blob(name="x", data=b"\xff\x00"), Blob)

        # Then
        assert msgpack.unpackb(payload, raw=False) == {"name": "x", "data": b"\xff\x00"}

    def test_serialize_out_of_range_integer_raises(self) -> None:
        """Integers beyond 64 bits are reported as a serialization error."""
        codec = MsgPackCodec()

        with pytest.raises(CacheSerializationError) as exc_info:
            codec.serialize(2**70, int)

        assert isinstance(exc_info.value.original_error, OverflowError)
