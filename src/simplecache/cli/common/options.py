"""
Reusable Typer Options Module

Option definitions shared by the main callback and the commands. Use them
as ``Annotated`` metadata, e.g. ``Annotated[bool, json_output_option]``.
"""

from __future__ import annotations

import typer

from simplecache.shared.constants import CLIDefaults, CLIHelp


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


app_name_option = typer.Option("--app-name", "-a", help=CLIHelp.APP_NAME_HELP)

db_path_option = typer.Option("--db-path", dir_okay=False, help=CLIHelp.DB_PATH_HELP)

config_option = typer.Option(
    "--config",
    "-c",
    exists=True,
    dir_okay=False,
    help=CLIHelp.CONFIG_HELP,
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option("--log-level", case_sensitive=False, help=CLIHelp.LOG_LEVEL_HELP)

json_output_option = typer.Option("--json", help=CLIHelp.JSON_HELP)

version_option = typer.Option(
    "--version",
    "-V",
    callback=version_callback,
    help=CLIHelp.VERSION_HELP,
    is_eager=True,
)

type_name_option = typer.Option("--type", "-t", help=CLIHelp.KEYS_TYPE_HELP)
