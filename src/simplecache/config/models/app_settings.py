"""Application and logging configuration models.

This module contains configuration models for the application identity
that owns the cache and for logging.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class AppSettings(BaseModel):
    """Application identity.

    The name selects the per-application directory holding the cache
    database. It has no default; the cache refuses to open until it is set.
    """

    name: str | None = Field(default=None, description="Application name owning the cache")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON-lines log file")
    console_output: bool = Field(default=True, description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"Invalid log level: {value}"
            raise ValueError(msg)
        return level


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
