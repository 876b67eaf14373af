"""
SimpleCache Package Main Entry Point

Runs the maintenance CLI with ``python -m simplecache``.
"""

import logging
import sys

from simplecache.cli.common.error_handler import handle_cli_error
from simplecache.cli.typer_app import app
from simplecache.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_ERROR)
    except SystemExit:  # pylint: disable=try-except-raise
        # Re-raise SystemExit to preserve exit codes
        raise
    # pylint: disable-next=broad-exception-caught
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "simplecache-main")
        sys.exit(exit_code)
