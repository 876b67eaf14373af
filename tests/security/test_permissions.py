"""Tests for cache file permission helpers."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from simplecache.security import set_secure_file_permissions
from simplecache.shared.errors import ApplicationError, ErrorCode


class TestSetSecureFilePermissions:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ApplicationError) as exc_info:
            set_secure_file_permissions(tmp_path / "missing.db3")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions only")
    def test_sets_owner_only_mode(self, tmp_path: Path) -> None:
        # Given
        db_file = tmp_path / "cache.db3"
        db_file.write_bytes(b"")
        db_file.chmod(0o644)

        # When
        set_secure_file_permissions(db_file)

        # Then
        assert stat.S_IMODE(db_file.stat().st_mode) == 0o600

    def test_chmod_failure_raises(self, tmp_path: Path, mocker) -> None:
        db_file = tmp_path / "cache.db3"
        db_file.write_bytes(b"")
        mocker.patch.object(Path, "chmod", side_effect=PermissionError("denied"))

        with pytest.raises(ApplicationError) as exc_info:
            set_secure_file_permissions(db_file)

        assert exc_info.value.code == ErrorCode.PERMISSION_DENIED
