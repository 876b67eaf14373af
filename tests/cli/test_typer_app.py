"""Tests for the maintenance CLI."""

from __future__ import annotations

import json
import os
from datetime import timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from simplecache.cli.typer_app import app
from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.services.sqlite_cache import SQLiteConnectionFactory, SQLiteStorage
from tests.helpers import Address, Person

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each command in an empty directory without SIMPLECACHE_ variables."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("SIMPLECACHE_"):
            monkeypatch.delenv(name)


@pytest.fixture
def populated_db(tmp_path: Path) -> Path:
    """Database with two people (one expired) and one address."""
    db_file = tmp_path / "cli" / "cache.db3"
    with BulkObjectCache(SQLiteStorage(SQLiteConnectionFactory(db_file))) as cache:
        cache.insert("alice", Person(name="john", age=19))
        cache.insert("bob", Person(name="mike", age=30), expiration=timedelta(seconds=-1))
        cache.insert("home", Address(street="Hollywood"))
    return db_file


def invoke_json(*args: str) -> dict:
    result = runner.invoke(app, ["--json", *args])
    return {"exit_code": result.exit_code, "payload": json.loads(result.stdout)}


class TestGlobalOptions:
    """Test options handled by the main callback."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "SimpleCache CLI v0.1.0" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("stats", "keys", "vacuum", "clear", "created-at"):
            assert command in result.output

    def test_missing_application_name_fails(self) -> None:
        """Without --app-name, --db-path or configuration the cache cannot open."""
        # When
        result = invoke_json("stats")

        # Then
        assert result["exit_code"] == 1
        assert result["payload"]["success"] is False
        assert "application_name" in result["payload"]["errors"][0]

    def test_app_name_selects_database(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        # Given
        monkeypatch.setenv("SIMPLECACHE_CACHE__DIRECTORY", str(tmp_path / "data"))

        # When
        result = invoke_json("--app-name", "cliapp", "stats")

        # Then
        assert result["exit_code"] == 0
        assert (tmp_path / "data" / "cliapp" / "SimpleCache" / "cache.db3").exists()


class TestCommands:
    """Test each command against a populated database."""

    def test_stats_json(self, populated_db: Path) -> None:
        result = invoke_json("--db-path", str(populated_db), "stats")

        assert result["exit_code"] == 0
        data = result["payload"]["data"]
        assert data["total_entries"] == 3
        assert data["expired_entries"] == 1
        assert data["valid_entries"] == 2
        assert data["entries_by_type"] == {"tests.helpers.Address": 1, "tests.helpers.Person": 2}

    def test_stats_table(self, populated_db: Path) -> None:
        result = runner.invoke(app, ["--db-path", str(populated_db), "stats"])

        assert result.exit_code == 0
        assert "Cache Statistics" in result.output
        assert "Total entries" in result.output

    def test_keys_json(self, populated_db: Path) -> None:
        result = invoke_json("--db-path", str(populated_db), "keys")

        assert result["payload"]["data"]["keys"] == ["alice", "bob", "home"]

    def test_keys_by_type(self, populated_db: Path) -> None:
        result = runner.invoke(app, ["--db-path", str(populated_db), "keys", "--type", "tests.helpers.Address"])

        assert result.exit_code == 0
        assert "home" in result.output
        assert "alice" not in result.output

    def test_vacuum(self, populated_db: Path) -> None:
        # When
        result = invoke_json("--db-path", str(populated_db), "vacuum")

        # Then
        assert result["payload"]["data"] == {"deleted": 1}
        assert invoke_json("--db-path", str(populated_db), "keys")["payload"]["data"]["keys"] == ["alice", "home"]

    def test_clear_by_type(self, populated_db: Path) -> None:
        # When
        result = invoke_json("--db-path", str(populated_db), "clear", "--type", "tests.helpers.Person")

        # Then
        assert result["payload"]["data"] == {"type_name": "tests.helpers.Person", "deleted": 2}
        assert invoke_json("--db-path", str(populated_db), "keys")["payload"]["data"]["keys"] == ["home"]

    def test_clear_requires_type(self, populated_db: Path) -> None:
        result = runner.invoke(app, ["--db-path", str(populated_db), "clear"])

        assert result.exit_code != 0

    def test_created_at(self, populated_db: Path) -> None:
        result = invoke_json("--db-path", str(populated_db), "created-at", "alice", "missing")

        data = result["payload"]["data"]
        assert data["alice"] is not None
        assert data["missing"] is None

    def test_human_readable_vacuum(self, populated_db: Path) -> None:
        result = runner.invoke(app, ["--db-path", str(populated_db), "vacuum"])

        assert result.exit_code == 0
        assert "Vacuum removed 1 expired entries" in result.output

    def test_human_readable_error(self) -> None:
        result = runner.invoke(app, ["stats"])

        assert result.exit_code == 1
        assert "application_name" in result.output
