"""
Console Reporter for ci-baseline.

Generates rich text output for terminal display using Rich library.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ci_baseline.reporting.base import BaselineReport, BaseReporter, ReportConfig, ReporterRegistry


@ReporterRegistry.register("console")
class ConsoleReporter(BaseReporter):
    """
    Console format reporter.

    Produces rich terminal output with colors, tables, and formatting.
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        console: Optional[Console] = None,
    ) -> None:
        super().__init__(config)
        self.console = console or Console()

    @property
    def format_name(self) -> str:
        return "console"

    @property
    def file_extension(self) -> str:
        return ".txt"

    def generate(self, report: BaselineReport) -> str:
        """Generate console report as plain text."""
        with self.console.capture() as capture:
            self.display(report)
        return capture.get()

    def display(self, report: BaselineReport) -> None:
        """Display the report to the console."""
        self.console.print(Panel.fit(
            f"[bold]Baseline:[/] {report.origin}\n"
            f"Entries: {report.entries}\n"
            f"Expected failures: {len(report.expected_failures)}\n"
            f"Excluded ports: {report.excluded_count}",
            title="CI Baseline",
        ))

        if report.expected_failures:
            table = Table(title="Expected Failures")
            table.add_column("Port", style="cyan")
            table.add_column("Triplet", style="yellow")
            for spec in report.expected_failures:
                table.add_row(spec.name, spec.triplet.canonical_name)
            self.console.print(table)

        if self.config.show_exclusions and report.exclusions:
            table = Table(title="Exclusions")
            table.add_column("Triplet", style="yellow")
            table.add_column("Skipped ports", style="dim")
            for triplet, ports in report.exclusions.items():
                table.add_row(triplet, ", ".join(ports) if ports else "-")
            self.console.print(table)
