"""
CLI Constants

Command names, help text and exit codes of the maintenance CLI.
"""

from typing import Literal


class CLICommands:
    """Command names."""

    STATS = "stats"
    KEYS = "keys"
    VACUUM = "vacuum"
    CLEAR = "clear"
    CREATED_AT = "created-at"


class CLIHelp:
    """CLI help text and descriptions."""

    VERSION_HELP = "Print version information and exit."
    VERSION_TEXT = "SimpleCache CLI v{version}"

    APP_NAME = "simplecache"
    APP_DESCRIPTION = "SimpleCache - persistent object cache maintenance"
    APP_STYLE: Literal["rich"] = "rich"

    APP_NAME_HELP = "Application name that owns the cache (overrides configuration)."
    DB_PATH_HELP = "Explicit cache database file, bypassing application-name lookup."
    CONFIG_HELP = "TOML configuration file."
    JSON_HELP = "Enable machine-readable JSON output instead of human-readable format."
    LOG_LEVEL_HELP = "Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."

    STATS_HELP = "Show entry counts and payload size."
    KEYS_HELP = "List cached keys."
    KEYS_TYPE_HELP = "Only list keys stored under this type tag."
    VACUUM_HELP = "Delete expired entries and compact the database."
    CLEAR_HELP = "Delete every entry stored under a type tag."
    CLEAR_TYPE_HELP = "Type tag to delete, e.g. 'myapp.models.Person'."
    CREATED_AT_HELP = "Show when keys were inserted."


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
