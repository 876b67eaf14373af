"""SimpleCache configuration.

Usage:
    from simplecache.config import get_config

    settings = get_config()
    settings.app.name
"""

from simplecache.config.loader import (
    SettingsLoader,
    get_config,
    load_settings,
    reload_config,
)
from simplecache.config.models import (
    AppSettings,
    CacheSettings,
    LoggingSettings,
    Settings,
)

__all__ = [
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
