"""Grouping of manifest entries by simplified package name."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from ..utils.logging import get_logger
from .parsers import PackageEntry

PATH_SEPARATOR = "/"
DEPENDENCY_FOLDER_PREFIX = "node_modules/"


def simplify_name(full_path: str) -> str:
    """Return the final path segment of a manifest key.

    ``node_modules/bar/node_modules/foo`` becomes ``foo``; a key without a
    separator is returned unchanged, so the function is idempotent.
    """
    return full_path.split(PATH_SEPARATOR)[-1]


def strip_dependency_prefix(full_path: str) -> str:
    """Remove a leading ``node_modules/`` from a manifest key."""
    if full_path.startswith(DEPENDENCY_FOLDER_PREFIX):
        return full_path[len(DEPENDENCY_FOLDER_PREFIX):]
    return full_path


def collation_key(value: str) -> Tuple[str, str]:
    """Case-insensitive sort key; the raw string breaks ties deterministically.

    Ordering is by code point after case folding, not locale collation:
    ``a-b`` sorts before ``a_b`` and ``eb`` before ``éa``.
    """
    return (value.casefold(), value)


def sort_case_insensitive(values: Iterable[str]) -> List[str]:
    return sorted(values, key=collation_key)


@dataclass
class AggregatedPackage:
    """All occurrences of one simplified package name, in manifest order."""

    name: str
    occurrences: List[PackageEntry] = field(default_factory=list)

    @property
    def display_occurrences(self) -> List[PackageEntry]:
        """Occurrences as tallied for display; the entry that opened the group counts twice."""
        return self.occurrences[:1] + self.occurrences

    @property
    def version_keys(self) -> Counter:
        """Count of ``<displayPath>@<version>`` strings over ``display_occurrences``."""
        return Counter(
            f"{strip_dependency_prefix(entry.full_path)}@{entry.version}"
            for entry in self.display_occurrences
        )

    @property
    def distinct_versions(self) -> List[str]:
        """Distinct non-empty versions, sorted case-insensitively."""
        return sort_case_insensitive({entry.version for entry in self.occurrences if entry.version})


@dataclass
class AggregationResult:
    """Aggregated packages keyed by simplified name."""

    packages: Dict[str, AggregatedPackage] = field(default_factory=dict)

    @property
    def sorted_names(self) -> List[str]:
        """Simplified names in display order."""
        return sort_case_insensitive(self.packages)

    def __iter__(self):
        for name in self.sorted_names:
            yield self.packages[name]

    def __len__(self) -> int:
        return len(self.packages)

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def get(self, name: str) -> AggregatedPackage:
        return self.packages[name]

    @property
    def total_occurrences(self) -> int:
        return sum(len(package.occurrences) for package in self.packages.values())


class PackageAggregator:
    """Groups package entries by simplified name."""

    def __init__(self) -> None:
        self.logger = get_logger("PackageAggregator")

    def aggregate(self, entries: Iterable[PackageEntry]) -> AggregationResult:
        """Group entries by simplified name.

        Args:
            entries: Manifest entries in manifest iteration order

        Returns:
            Aggregation result; each non-root entry lands in exactly one group
        """
        result = AggregationResult()

        for entry in entries:
            if not entry.full_path:
                continue

            name = simplify_name(entry.full_path)
            package = result.packages.get(name)
            if package is None:
                package = result.packages[name] = AggregatedPackage(name=name)
            package.occurrences.append(entry)

        self.logger.debug(
            f"Aggregated {result.total_occurrences} entries into {len(result)} packages"
        )
        return result
