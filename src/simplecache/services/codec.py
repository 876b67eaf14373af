"""
Payload Codec

Converts typed values to and from the opaque byte payloads stored in the
cache.

Conversion Strategy:
- A cached pydantic TypeAdapter turns the value into plain Python data
  (dataclasses, pydantic models, TypedDicts and containers become dicts
  and lists; bytes stay bytes)
- MessagePack packs the plain data into a compact, schema-less binary form;
  bytes use the native bin type, and leaves MessagePack has no type for
  (datetimes, enums, UUIDs, decimals) are packed in their JSON form
- Reading reverses both steps and validates the data back into the
  requested type
"""

from __future__ import annotations

import functools
import logging
from typing import Any, TypeVar, cast

import msgpack
from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from simplecache.services.type_registry import canonical_type_name
from simplecache.shared.errors import create_serialization_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


@functools.lru_cache(maxsize=256)
def _get_type_adapter(value_type: Any) -> TypeAdapter[Any]:
    """Get or create a cached TypeAdapter for the given type.

    TypeAdapter instances are expensive to build, so one is kept per type.

    Args:
        value_type: Type to create the adapter for

    Returns:
        Cached TypeAdapter instance
    """
    return TypeAdapter(value_type)


def _pack_default(value: Any) -> Any:
    """Pack a leaf MessagePack has no native type for in its JSON form."""
    return to_jsonable_python(value)


class MsgPackCodec:
    """MessagePack codec for cached values.

    Example:
        >>> codec = MsgPackCodec()
        >>> payload = codec.serialize({"a": 1}, dict[str, int])
        >>> codec.deserialize(payload, dict[str, int])
        {'a': 1}
    """

    def serialize(self, value: Any, value_type: Any) -> bytes:
        """Encode ``value`` as declared type ``value_type``.

        Raises:
            CacheSerializationError: If the value cannot be encoded
        """
        type_name = canonical_type_name(value_type)
        try:
            plain = _get_type_adapter(value_type).dump_python(value, mode="python")
            return cast("bytes", msgpack.packb(plain, use_bin_type=True, default=_pack_default))
        except (TypeError, ValueError, OverflowError) as e:
            raise create_serialization_error(
                message=f"Failed to serialize value as {type_name}: {e!s}",
                type_name=type_name,
                operation="serialize",
                original_error=e,
            ) from e

    def deserialize(self, data: bytes, value_type: type[T] | Any) -> T:
        """Decode a payload into ``value_type``.

        Raises:
            CacheSerializationError: If the payload is corrupt or does not
                validate as ``value_type``
        """
        type_name = canonical_type_name(value_type)
        try:
            plain = msgpack.unpackb(data, raw=False, strict_map_key=False)
        except (msgpack.UnpackException, TypeError, ValueError) as e:
            raise create_serialization_error(
                message=f"Corrupt cache payload for {type_name}: {e!s}",
                type_name=type_name,
                operation="deserialize",
                original_error=e,
            ) from e

        try:
            return cast("T", _get_type_adapter(value_type).validate_python(plain))
        except ValidationError as e:
            logger.warning(
                "Cached payload does not validate as %s: %d error(s)",
                type_name,
                e.error_count(),
            )
            raise create_serialization_error(
                message=f"Failed to deserialize payload as {type_name}: {e.error_count()} validation error(s)",
                type_name=type_name,
                operation="deserialize",
                original_error=e,
            ) from e
