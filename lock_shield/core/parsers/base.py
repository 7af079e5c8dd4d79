"""Base parser class and data models for manifest parsing."""

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from ..errors import ParseError, ReadError


@dataclass(frozen=True)
class PackageEntry:
    """One occurrence of a package in a manifest."""

    full_path: str
    version: str = ""


@dataclass(frozen=True)
class ManifestWarning:
    """A malformed manifest entry that was tolerated rather than rejected."""

    path: str
    message: str

    def __str__(self) -> str:
        return f'"{self.path}": {self.message}'


@dataclass
class ParsedManifest:
    """Container for entries parsed from a manifest file."""

    entries: List[PackageEntry] = field(default_factory=list)
    warnings: List[ManifestWarning] = field(default_factory=list)
    source_file: Optional[Path] = None

    def add_entry(self, entry: PackageEntry) -> None:
        """Add an entry to the collection.

        Args:
            entry: Entry to add
        """
        self.entries.append(entry)

    def add_warning(self, path: str, message: str) -> None:
        """Record a tolerated malformed entry.

        Args:
            path: Manifest key of the entry
            message: What was wrong with it
        """
        self.warnings.append(ManifestWarning(path=path, message=message))


class BaseParser(ABC):
    """Abstract base class for manifest parsers."""

    @abstractmethod
    def parse(self, file_path: Path) -> ParsedManifest:
        """Parse a manifest file.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed manifest entries
        """
        pass

    def read_json(self, file_path: Path) -> Any:
        return read_json_file(file_path)


def validate_file(file_path: Path) -> None:
    """Validate that the file exists and is readable.

    Args:
        file_path: Path to validate

    Raises:
        ReadError: If the file is missing, not a file, or not readable
    """
    if not file_path.exists():
        raise ReadError(file_path, "no such file or directory")

    if not file_path.is_file():
        raise ReadError(file_path, "path is not a file")

    if not os.access(file_path, os.R_OK):
        raise ReadError(file_path, "permission denied")


def read_json_file(file_path: Path) -> Any:
    """Read and decode a JSON document.

    Args:
        file_path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        ReadError: If the file cannot be read or decoded as UTF-8
        ParseError: If the content is not valid JSON
    """
    validate_file(file_path)

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(file_path, str(e)) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(str(e), file_path) from e
