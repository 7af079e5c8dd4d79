"""Node.js package-lock.json parser."""

from pathlib import Path
from typing import Any, Dict

from ...utils.logging import get_logger
from ..errors import SchemaError
from .base import BaseParser, PackageEntry, ParsedManifest

ROOT_PACKAGE_PATH = ""


class PackageLockParser(BaseParser):
    """Parser for the ``packages`` map of npm package-lock.json files (v2/v3)."""

    def __init__(self, strict: bool = False) -> None:
        """Initialize the package-lock.json parser.

        Args:
            strict: Reject malformed entries instead of tolerating them
        """
        self.strict = strict
        self.logger = get_logger("PackageLockParser")

    def parse(self, file_path: Path) -> ParsedManifest:
        """Parse a package-lock.json file.

        Args:
            file_path: Path to the lock file

        Returns:
            Parsed manifest, root entry excluded

        Raises:
            ReadError: If the file cannot be read
            ParseError: If the file is not valid JSON
            SchemaError: If the top-level ``packages`` object is missing,
                or a malformed entry is found in strict mode
        """
        data = self.read_json(file_path)
        packages = self._extract_packages(data)

        result = ParsedManifest(source_file=file_path)
        self._collect_entries(packages, result)

        for warning in result.warnings:
            self.logger.warning(f"Tolerated malformed entry {warning}")

        if self.strict and result.warnings:
            details = "; ".join(str(w) for w in result.warnings)
            raise SchemaError(
                f"{len(result.warnings)} malformed package entr"
                f"{'y' if len(result.warnings) == 1 else 'ies'} in {file_path}: {details}"
            )

        self.logger.debug(f"Parsed {len(result.entries)} package entries from {file_path}")
        return result

    def _extract_packages(self, data: Any) -> Dict[str, Any]:
        """Return the top-level ``packages`` mapping.

        Args:
            data: Decoded JSON document

        Returns:
            Mapping of package path to package metadata
        """
        if not isinstance(data, dict) or not isinstance(data.get("packages"), dict):
            raise SchemaError(
                'Invalid package-lock.json format: "packages" object not found at top level.'
            )
        return data["packages"]

    def _collect_entries(self, packages: Dict[str, Any], result: ParsedManifest) -> None:
        """Convert raw ``packages`` items into entries, in manifest order.

        Args:
            packages: Mapping of package path to package metadata
            result: Manifest to populate
        """
        for path, info in packages.items():
            if path == ROOT_PACKAGE_PATH:
                continue

            if not isinstance(info, dict):
                result.add_warning(path, f"entry is {type(info).__name__}, not an object; skipped")
                continue

            result.add_entry(PackageEntry(full_path=path, version=self._coerce_version(path, info, result)))

    def _coerce_version(self, path: str, info: Dict[str, Any], result: ParsedManifest) -> str:
        """Read the declared version, substituting an empty string when absent.

        Args:
            path: Manifest key of the entry
            info: Package metadata
            result: Manifest receiving warnings

        Returns:
            Version string
        """
        version = info.get("version")
        if version is None:
            result.add_warning(path, "no version declared")
            return ""
        if not isinstance(version, str):
            result.add_warning(path, f"version {version!r} is not a string")
            return str(version)
        return version
