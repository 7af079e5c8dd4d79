"""Core parsing, aggregation and matching logic for LockShield."""

from .aggregator import AggregatedPackage, AggregationResult, PackageAggregator, simplify_name
from .errors import LockShieldError, MissingArgumentError, ParseError, ReadError, SchemaError
from .matcher import VulnerabilityFinding, VulnerabilityMatcher, VulnerabilityReport, is_vulnerable_version
from .parsers import PackageEntry, PackageLockParser, ParsedManifest
from .rules import VulnerabilityRule, build_rules, default_rules, load_rules

__all__ = [
    "AggregatedPackage",
    "AggregationResult",
    "PackageAggregator",
    "simplify_name",
    "LockShieldError",
    "MissingArgumentError",
    "ParseError",
    "ReadError",
    "SchemaError",
    "VulnerabilityFinding",
    "VulnerabilityMatcher",
    "VulnerabilityReport",
    "is_vulnerable_version",
    "PackageEntry",
    "PackageLockParser",
    "ParsedManifest",
    "VulnerabilityRule",
    "build_rules",
    "default_rules",
    "load_rules",
]
