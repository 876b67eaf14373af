"""
SimpleCache Constants Module

Centralized constants for the cache engine and its CLI.
"""

from .cache import (
    LOG_KEY_PREVIEW_LENGTH,
    MICROSECONDS_PER_SECOND,
    NEVER_EXPIRES,
    CacheConditions,
    CacheDefaults,
    CacheLocation,
    CacheSchema,
)
from .cli import CLICommands, CLIDefaults, CLIHelp

__all__ = [
    "LOG_KEY_PREVIEW_LENGTH",
    "MICROSECONDS_PER_SECOND",
    "NEVER_EXPIRES",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CacheConditions",
    "CacheDefaults",
    "CacheLocation",
    "CacheSchema",
]
