"""
SimpleCache Typer CLI Application

Maintenance commands for an application's object cache: inspect,
sweep expired entries, and clear entries by type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from simplecache.cli.cache_handler import (
    handle_clear,
    handle_created_at,
    handle_keys,
    handle_stats,
    handle_vacuum,
)
from simplecache.cli.common.context import CliContext, LogLevel, set_cli_context
from simplecache.cli.common.error_handler import handle_cli_error
from simplecache.cli.common.options import (
    app_name_option,
    config_option,
    db_path_option,
    json_output_option,
    log_level_option,
    type_name_option,
    version_option,
)
from simplecache.config.loader import load_settings
from simplecache.shared.constants import CLICommands, CLIDefaults, CLIHelp
from simplecache.shared.logging import setup_structured_logger


def main_callback(
    app_name: str | None,
    db_path: Path | None,
    config_path: Path | None,
    log_level: LogLevel,
    json_output: bool,
) -> None:
    """
    Load settings, apply command-line overrides, and set up logging.

    Args:
        app_name: Application name overriding the configured one
        db_path: Explicit database file
        config_path: TOML configuration file
        log_level: Logging level
        json_output: Whether to output in JSON format
    """
    settings = load_settings(config_path)
    if app_name:
        settings.app.name = app_name

    setup_structured_logger(
        level=log_level.value,
        log_file=settings.logging.file,
        console_output=settings.logging.console_output and not json_output,
    )

    set_cli_context(
        CliContext(
            log_level=log_level,
            json_output=json_output,
            db_path=db_path,
            settings=settings,
        )
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    app_name: Annotated[str | None, app_name_option] = None,
    db_path: Annotated[Path | None, db_path_option] = None,
    config_path: Annotated[Path | None, config_option] = None,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.INFO,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,  # noqa: ARG001
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(app_name, db_path, config_path, log_level, json_output)
    # pylint: disable-next=broad-exception-caught
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


def _exit_with(exit_code: int) -> None:
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


@app.command(CLICommands.STATS, help=CLIHelp.STATS_HELP)
def stats_command() -> None:
    """Show entry counts and payload size."""
    _exit_with(handle_stats())


@app.command(CLICommands.KEYS, help=CLIHelp.KEYS_HELP)
def keys_command(
    type_name: Annotated[str | None, type_name_option] = None,
) -> None:
    """List cached keys.

    Examples:
        simplecache --app-name myapp keys
        simplecache --app-name myapp keys --type myapp.models.Person
    """
    _exit_with(handle_keys(type_name))


@app.command(CLICommands.VACUUM, help=CLIHelp.VACUUM_HELP)
def vacuum_command() -> None:
    """Delete expired entries and compact the database."""
    _exit_with(handle_vacuum())


@app.command(CLICommands.CLEAR, help=CLIHelp.CLEAR_HELP)
def clear_command(
    type_name: Annotated[
        str,
        typer.Option("--type", "-t", help=CLIHelp.CLEAR_TYPE_HELP),
    ],
) -> None:
    """Delete every entry stored under a type tag."""
    _exit_with(handle_clear(type_name))


@app.command(CLICommands.CREATED_AT, help=CLIHelp.CREATED_AT_HELP)
def created_at_command(
    keys: Annotated[list[str], typer.Argument(help="Keys to look up.")],
) -> None:
    """Show when keys were inserted."""
    _exit_with(handle_created_at(keys))


if __name__ == "__main__":
    app()
