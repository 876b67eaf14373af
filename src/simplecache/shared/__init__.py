"""SimpleCache Shared Module.

This package contains constants, error handling and logging used across SimpleCache.
"""

__all__ = ["constants", "errors", "logging"]
