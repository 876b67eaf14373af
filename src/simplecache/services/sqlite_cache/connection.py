"""Connection bootstrapping for the SQLite object cache.

This module resolves where the cache database lives for the running
platform and opens connections to it. ``SQLiteStorage`` only ever sees
the resulting ``connection_factory`` callable.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import sys
from pathlib import Path

from simplecache.security.permissions import set_secure_file_permissions
from simplecache.shared.constants import CacheDefaults, CacheLocation
from simplecache.shared.errors import (
    ApplicationError,
    ApplicationNotConfiguredError,
    ErrorCode,
    ErrorContext,
    create_storage_error,
)

logger = logging.getLogger(__name__)

_JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})
_SYNCHRONOUS_MODES = frozenset({"OFF", "NORMAL", "FULL", "EXTRA"})


def default_data_directory() -> Path:
    """Return the per-user application data directory for this platform.

    - Windows: ``%APPDATA%``
    - macOS: ``~/Library/Application Support``
    - Other: ``$XDG_DATA_HOME`` or ``~/.local/share``
    """
    if sys.platform == "win32":
        appdata = os.environ.get(CacheLocation.WINDOWS_DATA_ENV)
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"

    if sys.platform == "darwin":
        return Path.home() / CacheLocation.MACOS_DATA_DIR

    xdg_data = os.environ.get(CacheLocation.XDG_DATA_ENV)
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / CacheLocation.UNIX_DATA_DIR


class DatabaseLocator:
    """Resolves the cache database file for an application.

    The file lives at ``<base>/<application_name>/SimpleCache/cache.db3``.
    The application name is only required once the path is actually
    resolved, so a locator can be built before the name is known.

    Example:
        >>> locator = DatabaseLocator("myapp", base_directory=Path("/tmp"))
        >>> locator.database_path()
        PosixPath('/tmp/myapp/SimpleCache/cache.db3')
    """

    def __init__(
        self,
        application_name: str | None = None,
        base_directory: Path | str | None = None,
        filename: str = CacheLocation.FILENAME,
    ) -> None:
        self._application_name = application_name
        self.base_directory = Path(base_directory) if base_directory else None
        self.filename = filename

    @property
    def application_name(self) -> str:
        """Application identity owning the cache.

        Raises:
            ApplicationNotConfiguredError: If the name was never set
        """
        if not self._application_name:
            raise ApplicationNotConfiguredError(operation="resolve_database_path")
        return self._application_name

    @application_name.setter
    def application_name(self, value: str | None) -> None:
        self._application_name = value

    @property
    def cache_directory(self) -> Path:
        """Directory holding the database file."""
        base = self.base_directory or default_data_directory()
        return base / self.application_name / CacheLocation.FOLDER_NAME

    def database_path(self) -> Path:
        """Return the database file path, creating its directory.

        Raises:
            ApplicationNotConfiguredError: If the application name is unset
            InfrastructureError: If the directory cannot be created
        """
        directory = self.cache_directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise create_storage_error(
                message=f"Failed to create cache directory: {directory}",
                code=ErrorCode.DIRECTORY_CREATION_FAILED,
                operation="database_path",
                file_path=str(directory),
                original_error=e,
            ) from e
        return directory / self.filename


class SQLiteConnectionFactory:
    """Callable that opens a configured connection to the cache database.

    Args:
        database: Explicit database path, or a DatabaseLocator resolved on
            every call
        journal_mode: SQLite journal mode (WAL by default)
        synchronous: SQLite synchronous level
        busy_timeout_seconds: How long a locked database is retried
    """

    def __init__(
        self,
        database: DatabaseLocator | Path | str,
        journal_mode: str = CacheDefaults.JOURNAL_MODE,
        synchronous: str = CacheDefaults.SYNCHRONOUS,
        busy_timeout_seconds: float = CacheDefaults.BUSY_TIMEOUT_SECONDS,
    ) -> None:
        journal_mode = journal_mode.upper()
        synchronous = synchronous.upper()
        if journal_mode not in _JOURNAL_MODES:
            msg = f"Unsupported journal mode: {journal_mode}"
            raise ApplicationError(
                ErrorCode.CONFIG_ERROR,
                msg,
                ErrorContext(operation="connection_factory", additional_data={"config_key": "journal_mode"}),
            )
        if synchronous not in _SYNCHRONOUS_MODES:
            msg = f"Unsupported synchronous level: {synchronous}"
            raise ApplicationError(
                ErrorCode.CONFIG_ERROR,
                msg,
                ErrorContext(operation="connection_factory", additional_data={"config_key": "synchronous"}),
            )

        self.database = database
        self.journal_mode = journal_mode
        self.synchronous = synchronous
        self.busy_timeout_seconds = busy_timeout_seconds

    def resolve_path(self) -> Path:
        """Return the database file path this factory connects to."""
        if isinstance(self.database, DatabaseLocator):
            return self.database.database_path()

        path = Path(self.database)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def __call__(self) -> sqlite3.Connection:
        """Open a new connection.

        Raises:
            ApplicationNotConfiguredError: If the application name is unset
            InfrastructureError: If the database cannot be opened
        """
        db_path = self.resolve_path()
        db_is_new = not db_path.exists()

        try:
            conn = sqlite3.connect(
                str(db_path),
                timeout=self.busy_timeout_seconds,
                check_same_thread=False,  # access is serialized by SQLiteStorage
                isolation_level=None,  # autocommit
            )
            conn.execute(f"PRAGMA journal_mode={self.journal_mode}")
            conn.execute(f"PRAGMA synchronous={self.synchronous}")
        except sqlite3.Error as e:
            raise create_storage_error(
                message=f"Failed to open cache database: {e!s}",
                code=ErrorCode.CACHE_CONNECTION_FAILED,
                operation="open_connection",
                file_path=str(db_path),
                original_error=e,
            ) from e

        if db_is_new:
            try:
                set_secure_file_permissions(db_path)
            except ApplicationError as e:
                # Permissions are not critical for cache operation
                logger.warning(
                    "Failed to set secure permissions for DB file %s: %s",
                    db_path,
                    e,
                )

        logger.info("Opened cache database: %s", db_path)
        return conn
