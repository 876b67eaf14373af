"""Type tags for cached values.

Every cache entry records the tag of the type it was inserted as. Tags
are either registered explicitly or derived from the type's module and
qualified name, so they stay stable across runs without inspecting
values at runtime.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, TypeVar, get_origin

logger = logging.getLogger(__name__)

T = TypeVar("T")


def canonical_type_name(value_type: Any) -> str:
    """Derive the default tag for a type.

    - Plain classes: ``module.QualName`` (``str``, ``int``... for builtins)
    - Parameterized generics and other typing forms: their ``repr``

    Example:
        >>> canonical_type_name(int)
        'int'
        >>> canonical_type_name(list[int])
        'list[int]'
    """
    if isinstance(value_type, type) and get_origin(value_type) is None:
        module = value_type.__module__
        if module == "builtins":
            return value_type.__qualname__
        return f"{module}.{value_type.__qualname__}"
    return repr(value_type)


class TypeRegistry:
    """Maps value types to the tags stored with cache entries.

    Example:
        >>> registry = TypeRegistry()
        >>> @registry.register
        ... class Person: ...
        >>> registry.tag_for(Person).endswith("Person")
        True
        >>> _ = registry.register(dict, name="payload")
        >>> registry.tag_for(dict)
        'payload'
    """

    def __init__(self) -> None:
        self._tags: dict[Any, str] = {}
        self._types: dict[str, Any] = {}
        self._lock = threading.Lock()

    def register(self, value_type: T, name: str | None = None) -> T:
        """Register a type under an explicit tag.

        Returns the type unchanged so it can be used as a class decorator.

        Args:
            value_type: Type to register
            name: Tag to store (defaults to the canonical name)

        Raises:
            ValueError: If the type already has a different tag, or the tag
                belongs to another type
        """
        tag = name or canonical_type_name(value_type)
        if not tag.strip():
            msg = "Type tag must be a non-empty string"
            raise ValueError(msg)

        with self._lock:
            existing_tag = self._tags.get(value_type)
            if existing_tag is not None and existing_tag != tag:
                msg = f"{canonical_type_name(value_type)} is already registered as '{existing_tag}'"
                raise ValueError(msg)

            owner = self._types.get(tag)
            if owner is not None and owner is not value_type:
                msg = f"Type tag '{tag}' is already registered for {canonical_type_name(owner)}"
                raise ValueError(msg)

            self._tags[value_type] = tag
            self._types[tag] = value_type

        logger.debug("Registered type tag '%s'", tag)
        return value_type

    def named(self, name: str) -> Callable[[T], T]:
        """Class decorator registering the decorated type under ``name``."""

        def decorator(value_type: T) -> T:
            return self.register(value_type, name=name)

        return decorator

    def tag_for(self, value_type: Any) -> str:
        """Return the tag for a type, registered or canonical."""
        tag = self._tags.get(value_type)
        if tag is not None:
            return tag
        return canonical_type_name(value_type)

    def registered(self) -> dict[Any, str]:
        """Return a copy of the explicit registrations."""
        with self._lock:
            return dict(self._tags)
