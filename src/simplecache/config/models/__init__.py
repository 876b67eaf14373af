"""Configuration domain models."""

from simplecache.config.models.app_settings import AppSettings, LoggingSettings
from simplecache.config.models.cache_settings import CacheSettings
from simplecache.config.models.settings import Settings

__all__ = [
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
]
