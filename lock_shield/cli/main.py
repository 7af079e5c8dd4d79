"""Main CLI interface for LockShield."""

from pathlib import Path
from typing import Dict, Optional, Tuple

import typer
from rich.console import Console

from ..core.aggregator import AggregationResult, PackageAggregator
from ..core.errors import LockShieldError, MissingArgumentError
from ..core.matcher import VulnerabilityMatcher, VulnerabilityReport
from ..core.parsers import PackageLockParser
from ..core.rules import VulnerabilityRule, default_rules, load_rules
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging

USAGE = "Usage: lockshield <path-to-package-lock.json>"

app = typer.Typer(
    name="lockshield",
    help="Aggregate package-lock.json dependencies and check them against known-vulnerable versions",
    add_completion=False
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger("CLI")


def analyse_manifest(
    manifest: Path,
    rules: Dict[str, VulnerabilityRule],
    strict: bool = False
) -> Tuple[AggregationResult, VulnerabilityReport]:
    """Load, aggregate and match one manifest.

    Args:
        manifest: Path to the lock file
        rules: Rule table to match against
        strict: Reject malformed entries

    Returns:
        Aggregated packages and the vulnerability report
    """
    parsed = PackageLockParser(strict=strict).parse(manifest)
    aggregated = PackageAggregator().aggregate(parsed.entries)
    report = VulnerabilityMatcher(rules).match(aggregated)
    return aggregated, report


@app.command()
def scan(
    manifest: Optional[Path] = typer.Argument(
        None,
        help="Path to the package-lock.json file to analyse",
        show_default=False
    ),
    rules_file: Optional[Path] = typer.Option(
        None,
        "--rules",
        "-r",
        help="JSON file mapping package names to vulnerable versions (replaces the built-in list)"
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on malformed package entries instead of skipping them"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the results as JSON to this file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Print aggregated package versions and a vulnerability analysis for a lock file."""

    setup_logging(verbose=verbose)
    error_formatter = ConsoleFormatter(err_console)

    try:
        if manifest is None:
            raise MissingArgumentError(USAGE)

        rules = load_rules(rules_file) if rules_file else default_rules()
        logger.debug(f"Matching against {len(rules)} vulnerability rules")

        aggregated, report = analyse_manifest(manifest, rules, strict=strict)

        if output:
            json_formatter = JSONFormatter(output)
            json_formatter.save_results(
                json_formatter.format_scan_results(aggregated, report, manifest_path=manifest)
            )

    except MissingArgumentError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1)
    except LockShieldError as e:
        error_formatter.format_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        error_formatter.format_error(str(e))
        raise typer.Exit(1)

    ConsoleFormatter(console).print_report(aggregated, report)


def main() -> None:
    """Main entry point for LockShield CLI."""
    app()


if __name__ == "__main__":
    main()
