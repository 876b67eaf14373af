"""
CLI Context Management Module

Holds the global options parsed by the main callback in a ContextVar so
every command can read them.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from simplecache.config.models.settings import Settings


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        log_level: Logging level
        json_output: Whether to output in JSON format
        db_path: Explicit database file bypassing the application-name lookup
        settings: Loaded settings with command-line overrides applied
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    json_output: bool = Field(default=False, description="Whether to output in JSON format")
    db_path: Path | None = Field(default=None, description="Explicit cache database file")
    settings: Settings = Field(default_factory=Settings, description="Effective settings")

    def is_json_output_enabled(self) -> bool:
        """Check if JSON output is enabled."""
        return self.json_output


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Returns a default context if the main callback has not run.
    """
    context = cli_context_var.get()
    if context is None:
        return CliContext()
    return context


def set_cli_context(context: CliContext) -> None:
    """Set the current CLI context."""
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Reset the CLI context (used between invocations in tests)."""
    cli_context_var.set(None)
