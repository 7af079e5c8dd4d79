"""Known-vulnerable package versions."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping

from ..utils.logging import get_logger
from .errors import SchemaError
from .parsers.base import read_json_file

logger = get_logger("rules")

# Packages published in compromised releases during the September 2025 npm
# supply-chain attack.
DEFAULT_VULNERABLE_VERSIONS: Dict[str, str] = {
    "ansi-styles": "6.2.2",
    "debug": "4.4.2",
    "chalk": "5.6.1",
    "supports-color": "10.2.1",
    "strip-ansi": "7.1.1",
    "ansi-regex": "6.2.1",
    "wrap-ansi": "9.0.1",
    "color-convert": "3.1.1",
    "color-name": "2.0.1",
    "is-arrayish": "0.3.3",
    "slice-ansi": "7.1.1",
    "color": "5.0.1",
    "color-string": "2.1.1",
    "simple-swizzle": "0.2.3",
    "supports-hyperlinks": "4.1.1",
    "has-ansi": "6.0.1",
    "chalk-template": "1.1.1",
    "backslash": "0.2.1",
    "error-ex": "1.3.3",
    "proto-tinker-wc": "1.8.7",
}


@dataclass(frozen=True)
class VulnerabilityRule:
    """A package name and the exact version considered vulnerable."""

    package_name: str
    vulnerable_version: str

    def __post_init__(self) -> None:
        if not self.package_name:
            raise ValueError("Rule package name cannot be empty")


def build_rules(vulnerable_versions: Mapping[str, str]) -> Dict[str, VulnerabilityRule]:
    """Build a rule table keyed by package name.

    Args:
        vulnerable_versions: Mapping of simplified package name to version

    Returns:
        Rule table
    """
    return {
        name: VulnerabilityRule(package_name=name, vulnerable_version=version)
        for name, version in vulnerable_versions.items()
    }


def default_rules() -> Dict[str, VulnerabilityRule]:
    return build_rules(DEFAULT_VULNERABLE_VERSIONS)


def load_rules(file_path: Path) -> Dict[str, VulnerabilityRule]:
    """Load a rule table from a JSON file of the form ``{"package": "version"}``.

    Args:
        file_path: Path to the JSON rule file

    Returns:
        Rule table

    Raises:
        ReadError: If the file cannot be read
        ParseError: If the file is not valid JSON
        SchemaError: If the file is not an object of name to version strings
    """
    data = read_json_file(file_path)

    if not isinstance(data, dict):
        raise SchemaError(f"Invalid rule file {file_path}: expected a JSON object of package -> version")

    for name, version in data.items():
        if not name or not isinstance(version, str):
            raise SchemaError(
                f"Invalid rule file {file_path}: entry {name!r} must map a package name to a version string"
            )

    logger.debug(f"Loaded {len(data)} rules from {file_path}")
    return build_rules(data)
