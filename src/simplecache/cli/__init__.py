"""SimpleCache command-line interface."""

from simplecache.cli.typer_app import app

__all__ = ["app"]
