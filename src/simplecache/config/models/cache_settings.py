"""Cache configuration model.

This module contains the cache configuration model: where the database
file lives, how connections are tuned, and whether payloads are
compressed.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from simplecache.shared.constants import CacheDefaults, CacheLocation


class CacheSettings(BaseModel):
    """Cache database configuration."""

    directory: str | None = Field(
        default=None,
        description="Base directory overriding the platform data directory",
    )
    filename: str = Field(default=CacheLocation.FILENAME, description="Database file name")
    journal_mode: str = Field(default=CacheDefaults.JOURNAL_MODE, description="SQLite journal mode")
    synchronous: str = Field(default=CacheDefaults.SYNCHRONOUS, description="SQLite synchronous level")
    busy_timeout_seconds: float = Field(
        default=CacheDefaults.BUSY_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait on a locked database",
    )
    compress_payloads: bool = Field(default=False, description="Compress payloads with zlib")
    compression_level: int = Field(
        default=CacheDefaults.COMPRESSION_LEVEL,
        ge=1,
        le=9,
        description="zlib compression level",
    )

    @field_validator("journal_mode", "synchronous")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @field_validator("filename")
    @classmethod
    def _validate_filename(cls, value: str) -> str:
        if not value.strip() or "/" in value or "\\" in value:
            msg = f"filename must be a bare file name, got {value!r}"
            raise ValueError(msg)
        return value


__all__ = ["CacheSettings"]
