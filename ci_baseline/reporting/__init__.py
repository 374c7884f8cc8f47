"""
Reporting module for baseline application results.

Provides reporters for:
- JSON (CI driver consumption)
- Console (Rich terminal output)
"""

from ci_baseline.reporting.base import (
    BaselineReport,
    BaseReporter,
    ReportConfig,
    ReporterRegistry,
)
from ci_baseline.reporting.console import ConsoleReporter
from ci_baseline.reporting.json_reporter import JSONReporter

__all__ = [
    "BaselineReport",
    "BaseReporter",
    "ReportConfig",
    "ReporterRegistry",
    "ConsoleReporter",
    "JSONReporter",
]
