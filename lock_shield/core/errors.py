"""Exception types raised while loading manifests and rule tables."""

from pathlib import Path
from typing import Optional


class LockShieldError(Exception):
    """Base class for fatal LockShield errors."""


class MissingArgumentError(LockShieldError):
    """Raised when no manifest path was supplied."""


class ReadError(LockShieldError):
    """Raised when an input file cannot be accessed or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Error reading file "{path}": {reason}')


class ParseError(LockShieldError):
    """Raised when file content is not well-formed JSON."""

    def __init__(self, reason: str, path: Optional[Path] = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error parsing JSON: {reason}")


class SchemaError(LockShieldError):
    """Raised when parsed content lacks the expected structure."""
