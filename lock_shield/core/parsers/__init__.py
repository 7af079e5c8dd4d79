"""Manifest parsers."""

from .base import BaseParser, ManifestWarning, PackageEntry, ParsedManifest
from .nodejs import PackageLockParser

__all__ = [
    "BaseParser",
    "ManifestWarning",
    "PackageEntry",
    "ParsedManifest",
    "PackageLockParser",
]
