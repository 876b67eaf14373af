"""Byte filters applied to cache payloads.

A filter sees every payload right before it is written to disk and right
after it is read back. The cache never inspects the filtered bytes, so a
filter can compress or encrypt transparently.
"""

from __future__ import annotations

import logging
import zlib
from abc import ABC, abstractmethod

from simplecache.shared.constants import CacheDefaults
from simplecache.shared.errors import create_serialization_error

logger = logging.getLogger(__name__)


class PayloadFilter(ABC):
    """Before-write / after-read transform pair."""

    @abstractmethod
    def before_write(self, data: bytes) -> bytes:
        """Transform serialized bytes about to be written to disk."""

    @abstractmethod
    def after_read(self, data: bytes) -> bytes:
        """Undo ``before_write`` on bytes that were just read from disk."""


class IdentityFilter(PayloadFilter):
    """Leaves payloads untouched."""

    def before_write(self, data: bytes) -> bytes:
        return data

    def after_read(self, data: bytes) -> bytes:
        return data


class ZlibCompressionFilter(PayloadFilter):
    """Compresses payloads with zlib.

    Args:
        compression_level: zlib compression level (1-9, 6 is default)
    """

    def __init__(self, compression_level: int = CacheDefaults.COMPRESSION_LEVEL) -> None:
        if not 1 <= compression_level <= 9:
            msg = f"compression_level must be between 1 and 9, got {compression_level}"
            raise ValueError(msg)
        self.compression_level = compression_level

    def before_write(self, data: bytes) -> bytes:
        return zlib.compress(data, self.compression_level)

    def after_read(self, data: bytes) -> bytes:
        try:
            return zlib.decompress(data)
        except zlib.error as e:
            raise create_serialization_error(
                message=f"Failed to decompress cache payload: {e!s}",
                type_name="bytes",
                operation="after_read",
                original_error=e,
            ) from e


class ChainedFilter(PayloadFilter):
    """Applies several filters in order on write and in reverse on read.

    Example:
        >>> chain = ChainedFilter(ZlibCompressionFilter(), IdentityFilter())
        >>> chain.after_read(chain.before_write(b"payload"))
        b'payload'
    """

    def __init__(self, *filters: PayloadFilter) -> None:
        self.filters = filters

    def before_write(self, data: bytes) -> bytes:
        for payload_filter in self.filters:
            data = payload_filter.before_write(data)
        return data

    def after_read(self, data: bytes) -> bytes:
        for payload_filter in reversed(self.filters):
            data = payload_filter.after_read(data)
        return data
