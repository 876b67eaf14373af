"""SimpleCache Error Handling Module

This module defines the error handling system for SimpleCache, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for SimpleCache.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # File System Errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    DIRECTORY_CREATION_FAILED = "DIRECTORY_CREATION_FAILED"

    # Cache Errors
    INVALID_CACHE_KEY = "INVALID_CACHE_KEY"
    CACHE_KEY_NOT_FOUND = "CACHE_KEY_NOT_FOUND"
    CACHE_TYPE_MISMATCH = "CACHE_TYPE_MISMATCH"
    CACHE_SERIALIZATION_ERROR = "CACHE_SERIALIZATION_ERROR"
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
    CACHE_CONNECTION_FAILED = "CACHE_CONNECTION_FAILED"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    APPLICATION_NOT_CONFIGURED = "APPLICATION_NOT_CONFIGURED"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that the context is always safe to log.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export the set fields as a dict for logs and JSON output.

        Returns:
            Dictionary with a guaranteed additional_data key.

        Example:
            >>> ErrorContextModel(operation="get", file_path="/test").safe_dict()
            {'file_path': '/test', 'operation': 'get', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data if self.additional_data is not None else {}
        return data


ErrorContext = ErrorContextModel


class SimpleCacheError(Exception):
    """Base exception class for all SimpleCache errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize SimpleCacheError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(SimpleCacheError):
    """Domain-specific errors.

    These errors occur when a cache contract is violated by the caller
    or by the stored data.

    Examples:
    - Empty cache key
    - Key not present
    - Stored type tag differs from the requested one
    """


class InfrastructureError(SimpleCacheError):
    """Infrastructure-related errors.

    These errors occur when interacting with the file system or the
    SQLite database.
    """


class ApplicationError(SimpleCacheError):
    """Application-level errors.

    These errors occur at the application layer, typically
    related to configuration or application identity.
    """


class InvalidKeyError(DomainError):
    """Raised when a cache key is None or empty."""

    def __init__(self, operation: str | None = None) -> None:
        super().__init__(
            ErrorCode.INVALID_CACHE_KEY,
            "Cache key must be a non-empty string",
            ErrorContext(operation=operation),
        )


class KeyNotFoundError(DomainError):
    """Raised when no entry exists for a key."""

    def __init__(self, key: str, operation: str | None = None) -> None:
        super().__init__(
            ErrorCode.CACHE_KEY_NOT_FOUND,
            f"Key not found in cache: {key}",
            ErrorContext(operation=operation, additional_data={"key": key}),
        )
        self.key = key


class TypeMismatchError(DomainError):
    """Raised when a stored entry is tagged with a different type.

    Attributes:
        key: Cache key of the entry
        expected: Type tag the caller asked for
        actual: Type tag stored with the entry
    """

    def __init__(
        self,
        key: str,
        expected: str,
        actual: str,
        operation: str | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.CACHE_TYPE_MISMATCH,
            f"Cached item is not of type {expected}",
            ErrorContext(
                operation=operation,
                additional_data={"key": key, "expected": expected, "actual": actual},
            ),
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class CacheSerializationError(DomainError):
    """Raised when a value cannot be encoded or a payload cannot be decoded."""


class ApplicationNotConfiguredError(ApplicationError):
    """Raised when the application identity is read before it was set."""

    def __init__(self, operation: str | None = None) -> None:
        super().__init__(
            ErrorCode.APPLICATION_NOT_CONFIGURED,
            "Make sure to set application_name on startup",
            ErrorContext(operation=operation),
        )


def create_serialization_error(
    message: str,
    type_name: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> CacheSerializationError:
    """Create a serialization error with context."""
    context = ErrorContext(
        operation=operation,
        additional_data={"type_name": type_name},
    )
    return CacheSerializationError(
        ErrorCode.CACHE_SERIALIZATION_ERROR,
        message,
        context,
        original_error,
    )


def create_storage_error(
    message: str,
    code: ErrorCode,
    operation: str | None = None,
    file_path: str | None = None,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """Create a storage error with context."""
    context = ErrorContext(
        file_path=file_path,
        operation=operation,
    )
    return InfrastructureError(
        code,
        message,
        context,
        original_error,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )
