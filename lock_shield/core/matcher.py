"""Core vulnerability matching logic for LockShield."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from ..utils.logging import get_logger
from .aggregator import AggregatedPackage, AggregationResult, collation_key
from .rules import VulnerabilityRule


def is_vulnerable_version(candidate: str, vulnerable_version: str) -> bool:
    """Exact, case-sensitive comparison of a project version against a rule version."""
    return candidate == vulnerable_version


@dataclass(frozen=True)
class VulnerabilityFinding:
    """Comparison of one package's observed versions against one rule."""

    package_name: str
    project_versions: Tuple[str, ...]
    vulnerable_version: str
    matched_versions: Tuple[str, ...] = ()

    @property
    def is_vulnerable(self) -> bool:
        return bool(self.matched_versions)


@dataclass
class VulnerabilityReport:
    """Findings for every project package that has a rule."""

    findings: List[VulnerabilityFinding] = field(default_factory=list)

    @property
    def vulnerable_findings(self) -> List[VulnerabilityFinding]:
        """Vulnerable findings ordered by plain name sort."""
        return sorted(
            (finding for finding in self.findings if finding.is_vulnerable),
            key=lambda finding: finding.package_name,
        )

    @property
    def vulnerable_package_names(self) -> List[str]:
        return [finding.package_name for finding in self.vulnerable_findings]

    def find(self, package_name: str) -> VulnerabilityFinding:
        for finding in self.findings:
            if finding.package_name == package_name:
                return finding
        raise KeyError(package_name)


class VulnerabilityMatcher:
    """Matches aggregated packages against a table of known-vulnerable versions."""

    def __init__(self, rules: Mapping[str, VulnerabilityRule]) -> None:
        """Initialize the vulnerability matcher.

        Args:
            rules: Rule table keyed by simplified package name
        """
        self.rules: Dict[str, VulnerabilityRule] = dict(rules)
        self.logger = get_logger("VulnerabilityMatcher")

    def match(self, aggregated: AggregationResult) -> VulnerabilityReport:
        """Build findings for every aggregated package that has a rule.

        Packages without a rule, and rules without a package, produce nothing.

        Args:
            aggregated: Output of the aggregator

        Returns:
            Report with findings sorted case-insensitively by package name
        """
        findings = []

        for package in aggregated:
            rule = self.rules.get(package.name)
            if rule is None:
                continue

            finding = self._check_package(package, rule)
            self.logger.debug(
                f"{'MATCH' if finding.is_vulnerable else 'NO MATCH'}: {package.name} "
                f"{', '.join(finding.project_versions) or '(no version)'} vs {rule.vulnerable_version}"
            )
            findings.append(finding)

        findings.sort(key=lambda finding: collation_key(finding.package_name))
        return VulnerabilityReport(findings=findings)

    def _check_package(self, package: AggregatedPackage, rule: VulnerabilityRule) -> VulnerabilityFinding:
        """Compare one package's distinct versions against its rule.

        Args:
            package: Aggregated package
            rule: Rule for the same simplified name

        Returns:
            Finding for the package
        """
        versions = tuple(package.distinct_versions)
        matched = tuple(v for v in versions if is_vulnerable_version(v, rule.vulnerable_version))

        return VulnerabilityFinding(
            package_name=package.name,
            project_versions=versions,
            vulnerable_version=rule.vulnerable_version,
            matched_versions=matched,
        )
