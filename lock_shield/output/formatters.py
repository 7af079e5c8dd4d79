"""Output formatters for LockShield results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.text import Text

from ..core.aggregator import AggregatedPackage, AggregationResult, sort_case_insensitive
from ..core.matcher import VulnerabilityFinding, VulnerabilityReport
from ..utils.logging import get_logger

BANNER_WIDTH = 80
COLUMN_GUTTER = "  "
PACKAGE_HEADER = "Package"
VERSIONS_HEADER = "Versions"


def format_versions(package: AggregatedPackage) -> str:
    """Render a package's ``path@version`` keys, e.g. ``bar/node_modules/foo@1.0.0, foo@1.0.0 x2``."""
    counts = package.version_keys
    return ", ".join(
        f"{key} x{counts[key]}" if counts[key] > 1 else key
        for key in sort_case_insensitive(counts)
    )


class ConsoleFormatter:
    """Plain-text report formatter.

    ``render_*`` methods return lines so the report can be inspected without
    a terminal; ``print_report`` writes them through a rich console.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.logger = get_logger("ConsoleFormatter")

    def print_report(self, aggregated: AggregationResult, report: VulnerabilityReport) -> None:
        """Print the full report to the console.

        Args:
            aggregated: Aggregated packages
            report: Vulnerability findings
        """
        encoding = self.console.encoding
        for line in self.render_report(aggregated, report):
            # unencodable characters become "?"
            line = line.encode(encoding, errors="replace").decode(encoding)
            self.console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def render_report(self, aggregated: AggregationResult, report: VulnerabilityReport) -> List[str]:
        lines = self.render_package_table(aggregated)
        lines.append("")
        lines.extend(self.render_analysis(report))
        lines.extend(self.render_summary(report))
        return lines

    def render_package_table(self, aggregated: AggregationResult) -> List[str]:
        """Render the two-column Package / Versions table.

        Args:
            aggregated: Aggregated packages

        Returns:
            Table lines, including the ``Aggregated packages:`` caption
        """
        lines = ["Aggregated packages:"]
        rows = [(package.name, format_versions(package)) for package in aggregated]

        if not rows:
            lines.append("(none)")
            return lines

        name_width = max(len(PACKAGE_HEADER), *(len(name) for name, _ in rows))
        versions_width = max(len(VERSIONS_HEADER), *(len(versions) for _, versions in rows))

        lines.append(f"{PACKAGE_HEADER.ljust(name_width)}{COLUMN_GUTTER}{VERSIONS_HEADER.ljust(versions_width)}")
        lines.append(f"{'-' * name_width}{COLUMN_GUTTER}{'-' * versions_width}")
        for name, versions in rows:
            lines.append(f"{name.ljust(name_width)}{COLUMN_GUTTER}{versions.ljust(versions_width)}")
        return lines

    def render_analysis(self, report: VulnerabilityReport) -> List[str]:
        """Render the VULNERABILITY ANALYSIS section.

        Args:
            report: Vulnerability findings

        Returns:
            Section lines
        """
        lines = self._banner("=", "VULNERABILITY ANALYSIS")

        if not report.findings:
            lines.append("No packages found that are in the vulnerable packages list.")
            return lines

        lines.append(f"Found {len(report.findings)} package(s) that are in the vulnerable packages list:")
        lines.append("")
        for finding in report.findings:
            lines.extend(self._render_finding(finding))
            lines.append("")
        return lines

    def _render_finding(self, finding: VulnerabilityFinding) -> List[str]:
        lines = [
            f"Package: {finding.package_name}",
            f"  Project versions: {', '.join(finding.project_versions)}",
            f"  Vulnerable version: {finding.vulnerable_version}",
            f"  Is vulnerable version used: {'YES' if finding.is_vulnerable else 'NO'}",
        ]
        if finding.is_vulnerable:
            lines.append(f"  Vulnerable versions found: {', '.join(finding.matched_versions)}")
        return lines

    def render_summary(self, report: VulnerabilityReport) -> List[str]:
        """Render the VULNERABILITY SUMMARY section.

        Args:
            report: Vulnerability findings

        Returns:
            Section lines
        """
        lines = self._banner("-", "VULNERABILITY SUMMARY")
        vulnerable = report.vulnerable_findings

        if not vulnerable:
            lines.append("✅ No vulnerable packages detected in this project.")
            return lines

        lines.append(f"❌ Found {len(vulnerable)} vulnerable package(s):")
        for finding in vulnerable:
            lines.append(
                f"   - {finding.package_name} (using vulnerable version: {', '.join(finding.matched_versions)})"
            )
        lines.append("")
        lines.append("🔧 Recommendation: Update the vulnerable packages to secure versions.")
        return lines

    def _banner(self, char: str, title: str) -> List[str]:
        rule = char * BANNER_WIDTH
        return [rule, title, rule]

    def format_error(self, error: str) -> None:
        """Print an error message.

        Args:
            error: Error message
        """
        self.console.print(Text.assemble(("Error: ", "bold red"), error), highlight=False)


class JSONFormatter:
    """JSON formatter for LockShield output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_results(
        self,
        aggregated: AggregationResult,
        report: VulnerabilityReport,
        manifest_path: Optional[Path] = None
    ) -> Dict[str, Any]:
        """Format scan results as JSON.

        Args:
            aggregated: Aggregated packages
            report: Vulnerability findings
            manifest_path: Manifest that was scanned

        Returns:
            Formatted JSON data
        """
        packages_data = [
            {
                "name": package.name,
                "occurrences": [
                    {"path": entry.full_path, "version": entry.version}
                    for entry in package.occurrences
                ],
                "versions": format_versions(package),
                "distinct_versions": package.distinct_versions,
            }
            for package in aggregated
        ]

        findings_data = [
            {
                "package": finding.package_name,
                "project_versions": list(finding.project_versions),
                "vulnerable_version": finding.vulnerable_version,
                "is_vulnerable": finding.is_vulnerable,
                "matched_versions": list(finding.matched_versions),
            }
            for finding in report.findings
        ]

        result = {
            "scan_summary": {
                "manifest": str(manifest_path) if manifest_path else None,
                "total_packages": len(aggregated),
                "total_occurrences": aggregated.total_occurrences,
                "packages_with_rules": len(report.findings),
                "vulnerable_packages": report.vulnerable_package_names,
                "timestamp": datetime.now().isoformat()
            },
            "packages": packages_data,
            "findings": findings_data
        }

        return result

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(results, f, indent=2, ensure_ascii=False)

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
