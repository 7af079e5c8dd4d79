"""Tests for report formatting."""

import io
import json

import pytest
from rich.console import Console

from lock_shield.core.aggregator import PackageAggregator
from lock_shield.core.matcher import VulnerabilityMatcher
from lock_shield.core.parsers import PackageEntry
from lock_shield.core.rules import build_rules
from lock_shield.output.formatters import ConsoleFormatter, JSONFormatter


def _scan(pairs, rules):
    aggregated = PackageAggregator().aggregate([PackageEntry(path, version) for path, version in pairs])
    return aggregated, VulnerabilityMatcher(build_rules(rules)).match(aggregated)


class TestPackageTable:
    """Test the aggregated package table."""

    def test_empty_table(self):
        aggregated, _ = _scan([], {})
        assert ConsoleFormatter().render_package_table(aggregated) == ["Aggregated packages:", "(none)"]

    def test_column_widths(self):
        """Test columns pad to the widest cell with a two-space gutter."""
        aggregated, _ = _scan(
            [("node_modules/a", "1.0.0"), ("node_modules/long-package-name", "2.0.0")],
            {},
        )

        lines = ConsoleFormatter().render_package_table(aggregated)

        assert lines == [
            "Aggregated packages:",
            "Package            Versions                  ",
            "-----------------  --------------------------",
            "a                  a@1.0.0 x2                ",
            "long-package-name  long-package-name@2.0.0 x2",
        ]

    def test_header_wider_than_cells(self):
        aggregated, _ = _scan([("node_modules/x", "1")], {})
        lines = ConsoleFormatter().render_package_table(aggregated)
        assert lines[1] == "Package  Versions"
        assert lines[2] == "-------  --------"
        assert lines[3] == "x        x@1 x2  "


class TestVulnerabilitySections:
    """Test the analysis and summary sections."""

    def test_vulnerable_report(self):
        aggregated, report = _scan(
            [("node_modules/foo", "1.0.0"), ("node_modules/bar/node_modules/foo", "1.0.0")],
            {"foo": "1.0.0"},
        )

        formatter = ConsoleFormatter()
        analysis = formatter.render_analysis(report)
        summary = formatter.render_summary(report)

        assert analysis == [
            "=" * 80,
            "VULNERABILITY ANALYSIS",
            "=" * 80,
            "Found 1 package(s) that are in the vulnerable packages list:",
            "",
            "Package: foo",
            "  Project versions: 1.0.0",
            "  Vulnerable version: 1.0.0",
            "  Is vulnerable version used: YES",
            "  Vulnerable versions found: 1.0.0",
            "",
        ]
        assert summary == [
            "-" * 80,
            "VULNERABILITY SUMMARY",
            "-" * 80,
            "❌ Found 1 vulnerable package(s):",
            "   - foo (using vulnerable version: 1.0.0)",
            "",
            "🔧 Recommendation: Update the vulnerable packages to secure versions.",
        ]

    def test_safe_report(self):
        _, report = _scan([("node_modules/baz", "2.0.0")], {"baz": "1.0.0"})

        formatter = ConsoleFormatter()
        analysis = formatter.render_analysis(report)
        summary = formatter.render_summary(report)

        assert "  Is vulnerable version used: NO" in analysis
        assert not any(line.startswith("  Vulnerable versions found") for line in analysis)
        assert summary[-1] == "✅ No vulnerable packages detected in this project."
        assert not any("Recommendation" in line for line in summary)

    def test_no_findings(self):
        _, report = _scan([], {"foo": "1.0.0"})
        analysis = ConsoleFormatter().render_analysis(report)
        assert analysis[-1] == "No packages found that are in the vulnerable packages list."

    def test_print_report_is_deterministic(self):
        """Test printing the same report twice gives identical text."""
        pairs = [("node_modules/chalk", "5.6.1"), ("node_modules/[weird]", "1"), ("node_modules/b", "2")]
        outputs = []
        for _ in range(2):
            aggregated, report = _scan(pairs, {"chalk": "5.6.1", "b": "1"})
            buffer = io.StringIO()
            ConsoleFormatter(Console(file=buffer, width=200)).print_report(aggregated, report)
            outputs.append(buffer.getvalue())

        assert outputs[0] == outputs[1]
        assert "[weird]@1" in outputs[0]
        assert "   - chalk (using vulnerable version: 5.6.1)" in outputs[0]

    def test_print_report_on_ascii_stream(self):
        """Test the whole report is written when the stream cannot encode emoji."""
        aggregated, report = _scan([("node_modules/chalk", "5.6.1")], {"chalk": "5.6.1"})
        buffer = io.BytesIO()
        stream = io.TextIOWrapper(buffer, encoding="ascii")

        ConsoleFormatter(Console(file=stream, width=200)).print_report(aggregated, report)
        stream.flush()

        lines = buffer.getvalue().decode("ascii").splitlines()
        assert "? Found 1 vulnerable package(s):" in lines
        assert lines[-1] == "? Recommendation: Update the vulnerable packages to secure versions."


class TestJSONFormatter:
    """Test JSON output."""

    def test_format_and_save(self, tmp_path):
        aggregated, report = _scan(
            [("node_modules/foo", "1.0.0"), ("node_modules/bar", "2.0.0")],
            {"foo": "1.0.0"},
        )
        output_file = tmp_path / "results.json"
        formatter = JSONFormatter(output_file)

        formatter.save_results(formatter.format_scan_results(aggregated, report))

        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert data["scan_summary"]["total_packages"] == 2
        assert data["scan_summary"]["vulnerable_packages"] == ["foo"]
        assert [p["name"] for p in data["packages"]] == ["bar", "foo"]
        assert data["findings"] == [{
            "package": "foo",
            "project_versions": ["1.0.0"],
            "vulnerable_version": "1.0.0",
            "is_vulnerable": True,
            "matched_versions": ["1.0.0"],
        }]

    def test_save_requires_output_file(self):
        with pytest.raises(ValueError, match="No output file"):
            JSONFormatter().save_results({})
