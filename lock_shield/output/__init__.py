"""Output formatters for LockShield."""

from .formatters import ConsoleFormatter, JSONFormatter, format_versions

__all__ = [
    "ConsoleFormatter",
    "JSONFormatter",
    "format_versions",
]
