"""
JSON Output Formatter for the SimpleCache CLI

Produces the machine-readable envelope printed when ``--json`` is given.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "stats", "vacuum")
        data: The command's output data
        errors: List of error messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(success=True, command="vacuum", data={"deleted": 3})
        >>> print(output.decode())
        {
          "command": "vacuum",
          "data": {
            "deleted": 3
          },
          "errors": [],
          "success": true,
          "timestamp": "2026-10-18T10:30:00+00:00"
        }
    """
    if errors is None:
        errors = []

    # If there are errors, success should be False
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS,
        )
    except TypeError as e:
        error_data = {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "data": None,
            "errors": [f"JSON serialization failed: {e!s}"],
        }
        return orjson.dumps(
            error_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )


def write_json_output(output: bytes) -> None:
    """Write an encoded envelope to stdout followed by a newline."""
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()
