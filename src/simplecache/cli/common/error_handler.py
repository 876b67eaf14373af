"""
CLI Error Handling Utilities

Consistent error output and exit codes for every command.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

from simplecache.cli.common.context import get_cli_context
from simplecache.cli.json_formatter import format_json_output, write_json_output
from simplecache.shared.constants import CLIDefaults
from simplecache.shared.errors import (
    ErrorCode,
    ErrorContext,
    SimpleCacheError,
)
from simplecache.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., int])


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Report an error for a CLI command.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    if isinstance(error, SimpleCacheError):
        cache_error = error
    else:
        cache_error = SimpleCacheError(
            ErrorCode.CLI_UNEXPECTED_ERROR,
            f"Unexpected error: {error!s}",
            ErrorContext(operation=command),
            original_error=error,
        )

    log_operation_error(logger=logger, error=cache_error, operation=command)

    if json_output:
        write_json_output(format_json_output(success=False, command=command, errors=[str(cache_error)]))
    else:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(cache_error.message)}", highlight=False)

    return CLIDefaults.EXIT_ERROR


def handle_cli_errors(command: str) -> Callable[[F], F]:
    """Decorator turning exceptions raised by a command handler into an exit code.

    Example:
        >>> @handle_cli_errors(command="vacuum")
        ... def handle_vacuum() -> int:
        ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            # pylint: disable-next=broad-exception-caught
            except Exception as e:  # noqa: BLE001
                return handle_cli_error(
                    e,
                    command,
                    json_output=get_cli_context().is_json_output_enabled(),
                )

        return wrapper  # type: ignore[return-value]

    return decorator
