"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML
- Environment variable overrides (``SIMPLECACHE_`` prefix)
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import toml
from pydantic import ValidationError

from simplecache.config.models.settings import Settings
from simplecache.shared.errors import create_config_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = (
    Path("simplecache.toml"),
    Path("config/simplecache.toml"),
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance (thread-safe).

        Returns:
            The global Settings instance, loading it if necessary.
        """
        # First check (without lock for performance)
        if self._instance is None:
            # Second check (with lock for thread-safety)
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance.

        Args:
            config_path: Optional TOML file to load instead of the defaults

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, the
            default locations are tried, then the environment alone.

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ApplicationError: If the file is missing, unreadable or invalid
    """
    try:
        if config_path:
            return Settings.from_toml_file(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return Settings.from_toml_file(default_path)

        return Settings()

    except FileNotFoundError as e:
        raise create_config_error(
            message=str(e),
            config_key="config_path",
            operation="load_settings",
            original_error=e,
        ) from e
    except (toml.TomlDecodeError, OSError) as e:
        raise create_config_error(
            message=f"Failed to read configuration file: {e}",
            config_key="config_path",
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        logger.warning("Invalid configuration: %d error(s)", e.error_count())
        raise create_config_error(
            message=f"Invalid configuration: {e.error_count()} validation error(s)",
            operation="load_settings",
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance."""
    return _loader.reload_config(config_path)
