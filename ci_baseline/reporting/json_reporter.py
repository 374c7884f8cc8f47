"""
JSON Reporter for ci-baseline.

Generates structured JSON output for consumption by CI drivers.
"""

from __future__ import annotations

import json

from ci_baseline.reporting.base import BaselineReport, BaseReporter, ReporterRegistry


@ReporterRegistry.register("json")
class JSONReporter(BaseReporter):
    """JSON format reporter."""

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def file_extension(self) -> str:
        return ".json"

    def generate(self, report: BaselineReport) -> str:
        """Generate JSON report."""
        data = report.to_dict()
        if not self.config.show_exclusions:
            data.pop("exclusions")
        return json.dumps(data, indent=2, default=str)
