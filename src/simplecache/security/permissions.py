"""File permission utilities for the cache database.

Newly created cache files are restricted to their owner since cached
payloads may hold application data the user considers private.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from simplecache.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

OWNER_READ_WRITE = 0o600


def set_secure_file_permissions(file_path: Path | str) -> None:
    """Set secure file permissions (600 - owner read/write only).

    Args:
        file_path: Path to the file to secure

    Raises:
        ApplicationError: If the file is missing or permission setting fails
    """
    file_path = Path(file_path)

    context = ErrorContext(
        operation="set_secure_file_permissions",
        file_path=str(file_path),
    )

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise ApplicationError(
            ErrorCode.FILE_NOT_FOUND,
            f"Cannot set permissions: file does not exist: {file_path}",
            context,
        )

    try:
        file_path.chmod(OWNER_READ_WRITE)
    except PermissionError as e:
        logger.exception("Permission denied: %s", file_path)
        raise ApplicationError(
            ErrorCode.PERMISSION_DENIED,
            f"Cannot set permissions: {file_path}",
            context,
            original_error=e,
        ) from e
    except OSError as e:
        logger.exception("Failed to set permissions: %s", file_path)
        raise ApplicationError(
            ErrorCode.FILE_WRITE_ERROR,
            f"Failed to set permissions: {file_path}",
            context,
            original_error=e,
        ) from e

    if sys.platform == "win32":
        # chmod only toggles the read-only flag on Windows
        logger.debug("Basic Windows permissions set for: %s", file_path)
    else:
        logger.debug("Unix permissions (600) set for: %s", file_path)
