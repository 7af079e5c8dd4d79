"""LockShield - aggregate package-lock.json dependencies and flag known-vulnerable versions."""

__version__ = "0.1.0"

from .core.aggregator import PackageAggregator
from .core.matcher import VulnerabilityMatcher
from .core.parsers import PackageLockParser
from .core.rules import default_rules, load_rules
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "PackageAggregator",
    "VulnerabilityMatcher",
    "PackageLockParser",
    "default_rules",
    "load_rules",
    "ConsoleFormatter",
    "JSONFormatter",
]
