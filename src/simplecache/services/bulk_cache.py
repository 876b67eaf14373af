"""Multi-key operations layered over the single-key cache primitives.

Every bulk operation is a sequential loop over the single-key call. None
of them is transactional: when one item fails, the items before it stay
committed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, TypeVar

from simplecache.services.object_cache import Expiration, ObjectCache
from simplecache.shared.constants import LOG_KEY_PREVIEW_LENGTH
from simplecache.shared.errors import KeyNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BulkObjectCache(ObjectCache):
    """Object cache with ``*_many`` variants of the key-based operations."""

    def get_many(self, keys: Iterable[str], value_type: type[T] | Any) -> dict[str, T]:
        """Return the values of the keys that exist; missing keys are omitted."""
        result: dict[str, T] = {}
        for key in keys:
            try:
                result[key] = self.get(key, value_type)
            except KeyNotFoundError:
                continue
        return result

    def insert_many(
        self,
        items: Mapping[str, Any] | Iterable[tuple[str, Any]],
        value_type: Any | None = None,
        *,
        expiration: Expiration = None,
    ) -> int:
        """Insert every key/value pair in iteration order.

        Returns:
            Sum of rows affected by the individual inserts
        """
        pairs = items.items() if isinstance(items, Mapping) else items
        total = 0
        for key, value in pairs:
            total += self.insert(key, value, value_type, expiration=expiration)
        return total

    def invalidate_many(self, keys: Iterable[str], value_type: type[T] | Any) -> int:
        """Invalidate each key that is stored under ``value_type``.

        Keys that are not present are skipped and not counted. A key stored
        under a different type raises ``TypeMismatchError`` immediately and
        the remaining keys are not processed; keys handled before it stay
        deleted.

        Returns:
            Number of entries deleted
        """
        deleted = 0
        for key in keys:
            try:
                deleted += self.invalidate(key, value_type)
            except KeyNotFoundError:
                logger.debug(
                    "Skipping missing cache key during bulk invalidate: %s",
                    key[:LOG_KEY_PREVIEW_LENGTH],
                )
        return deleted

    def get_created_at_many(self, keys: Iterable[str]) -> dict[str, datetime | None]:
        """Return the creation time of every key, None for absent ones."""
        return {key: self.get_created_at(key) for key in keys}
