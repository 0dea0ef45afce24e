"""Output formatters for LockWatch results."""

import json
from datetime import datetime
from pathlib import Path
from typing import AbstractSet, Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.analyzer import AnalysisReport
from ..core.errors import LockfileError
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for LockWatch output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("ConsoleFormatter")

    def format_report(self, report: AnalysisReport) -> None:
        """Display the outcome of a lockfile analysis.

        Args:
            report: Analysis report to render
        """
        result = report.result

        if not result.found:
            self.console.print(Panel(
                f"Scanned {result.scanned_count} unique packages and found no matches "
                "from the affected list.",
                title="No Affected Packages Found",
                style="green"
            ))
        else:
            self.console.print(Panel(
                f"Scanned {result.scanned_count} unique packages and found the following matches:",
                title=f"{len(result.found)} Affected Package(s) Found",
                style="yellow"
            ))
            self.console.print(self._create_found_table(report))

        for note in report.diagnostics:
            self.console.print(f"[dim]Note: {escape(note)}[/dim]")

    def _create_found_table(self, report: AnalysisReport) -> Table:
        """Create the table of matched packages.

        Args:
            report: Analysis report with matches

        Returns:
            Rich table with one row per matched package
        """
        table = Table(title=f"Affected packages in {escape(report.file_name)}")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="yellow")

        for pkg in report.result.found:
            table.add_row(escape(pkg.name), f"v{escape(pkg.version)}")

        return table

    def format_error(self, error: LockfileError) -> None:
        """Display an analysis failure.

        Args:
            error: The failure to show
        """
        self.console.print(Panel(escape(error.message), title="Analysis Failed", style="red"))

    def format_affected_list(self, names: AbstractSet[str], source: str) -> None:
        """Display the affected package list.

        Args:
            names: Affected package names
            source: Where the list came from
        """
        table = Table(title=f"Affected packages ({len(names)})", caption=escape(source))
        table.add_column("Package", style="cyan")
        for name in sorted(names):
            table.add_row(escape(name))
        self.console.print(table)


class JSONFormatter:
    """JSON formatter for LockWatch output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_report(self, report: AnalysisReport) -> Dict[str, Any]:
        """Format an analysis report as JSON data.

        Args:
            report: Analysis report

        Returns:
            Formatted JSON data
        """
        return {
            "file": report.file_name,
            **report.result.to_dict(),
            "diagnostics": list(report.diagnostics),
            "analysis_time_seconds": report.analysis_time,
            "timestamp": datetime.now().isoformat(),
        }

    def format_error(self, error: LockfileError) -> Dict[str, Any]:
        """Format an analysis failure as JSON data."""
        return {
            "error": {
                "kind": error.kind.value,
                "message": error.message,
                "timestamp": datetime.now().isoformat(),
            }
        }

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

            self.logger.debug(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
