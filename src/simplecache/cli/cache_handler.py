"""Cache maintenance command handlers.

Each handler opens the cache described by the CLI context, does its
work, prints either a rich rendering or the JSON envelope, and returns
an exit code.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from dependency_injector import providers
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simplecache.cli.common.context import CliContext, get_cli_context
from simplecache.cli.common.error_handler import handle_cli_errors
from simplecache.cli.json_formatter import format_json_output, write_json_output
from simplecache.containers import Container
from simplecache.services.bulk_cache import BulkObjectCache
from simplecache.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)


def open_cache(context: CliContext) -> BulkObjectCache:
    """Build the cache for the effective settings of a CLI invocation."""
    container = Container()
    container.config.override(providers.Object(context.settings))
    if context.db_path is not None:
        container.database.override(providers.Object(context.db_path))
    return container.object_cache()


def _emit(command: str, data: Any) -> bool:
    """Write the JSON envelope when JSON output is on; report whether it was."""
    if not get_cli_context().is_json_output_enabled():
        return False
    write_json_output(format_json_output(success=True, command=command, data=data))
    return True


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@handle_cli_errors(command=CLICommands.STATS)
def handle_stats() -> int:
    """Show entry counts and payload size."""
    with open_cache(get_cli_context()) as cache:
        stats = cache.stats()

    data = {
        "total_entries": stats.total_entries,
        "valid_entries": stats.valid_entries,
        "expired_entries": stats.expired_entries,
        "total_size_bytes": stats.total_size_bytes,
        "entries_by_type": stats.entries_by_type,
    }
    if _emit(CLICommands.STATS, data):
        return CLIDefaults.EXIT_SUCCESS

    console = Console()
    summary = Table(title="Cache Statistics", show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", justify="right")
    summary.add_row("Total entries", str(stats.total_entries))
    summary.add_row("Valid entries", str(stats.valid_entries))
    summary.add_row("Expired entries", str(stats.expired_entries))
    summary.add_row("Payload size (bytes)", str(stats.total_size_bytes))
    console.print(summary)

    if stats.entries_by_type:
        by_type = Table(title="Entries by Type")
        by_type.add_column("Type", style="green")
        by_type.add_column("Entries", justify="right")
        for type_name, count in sorted(stats.entries_by_type.items()):
            by_type.add_row(type_name, str(count))
        console.print(by_type)

    return CLIDefaults.EXIT_SUCCESS


@handle_cli_errors(command=CLICommands.KEYS)
def handle_keys(type_name: str | None) -> int:
    """List cached keys, optionally for one type tag."""
    with open_cache(get_cli_context()) as cache:
        keys = cache.storage.keys(type_name)

    if _emit(CLICommands.KEYS, {"type_name": type_name, "keys": keys}):
        return CLIDefaults.EXIT_SUCCESS

    console = Console()
    if not keys:
        console.print("[yellow]No keys found[/yellow]")
        return CLIDefaults.EXIT_SUCCESS

    for key in keys:
        console.print(key, markup=False, highlight=False)
    return CLIDefaults.EXIT_SUCCESS


@handle_cli_errors(command=CLICommands.VACUUM)
def handle_vacuum() -> int:
    """Delete expired entries and compact the database."""
    with open_cache(get_cli_context()) as cache:
        deleted = cache.vacuum()

    if _emit(CLICommands.VACUUM, {"deleted": deleted}):
        return CLIDefaults.EXIT_SUCCESS

    Console().print(f"[green]Vacuum removed {deleted} expired entries[/green]")
    return CLIDefaults.EXIT_SUCCESS


@handle_cli_errors(command=CLICommands.CLEAR)
def handle_clear(type_name: str) -> int:
    """Delete every entry stored under a raw type tag."""
    with open_cache(get_cli_context()) as cache:
        deleted = cache.invalidate_tag(type_name)

    if _emit(CLICommands.CLEAR, {"type_name": type_name, "deleted": deleted}):
        return CLIDefaults.EXIT_SUCCESS

    Console().print(f"[green]Deleted {deleted} entries[/green]")
    return CLIDefaults.EXIT_SUCCESS


@handle_cli_errors(command=CLICommands.CREATED_AT)
def handle_created_at(keys: list[str]) -> int:
    """Show when keys were inserted."""
    with open_cache(get_cli_context()) as cache:
        created = cache.get_created_at_many(keys)

    data = {key: _isoformat(value) for key, value in created.items()}
    if _emit(CLICommands.CREATED_AT, data):
        return CLIDefaults.EXIT_SUCCESS

    table = Table(title="Created At")
    table.add_column("Key", style="cyan")
    table.add_column("Created at (UTC)")
    for key, value in data.items():
        table.add_row(escape(key), value or "[dim]not cached[/dim]")
    Console().print(table)
    return CLIDefaults.EXIT_SUCCESS
