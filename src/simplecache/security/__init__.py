"""Security helpers for SimpleCache."""

from simplecache.security.permissions import set_secure_file_permissions

__all__ = ["set_secure_file_permissions"]
