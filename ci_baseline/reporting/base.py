"""
Base Reporter for ci-baseline.

Provides the report model and the abstract base class for all formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ci_baseline.models.base import PackageSpec
from ci_baseline.models.baseline import ExclusionsMap


@dataclass
class BaselineReport:
    """Outcome of applying a baseline to the tracked triplets."""

    origin: str
    entries: int
    expected_failures: list[PackageSpec] = field(default_factory=list)
    exclusions: dict[str, list[str]] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build(
        cls,
        origin: str,
        entries: int,
        expected_failures: list[PackageSpec],
        exclusions_map: ExclusionsMap,
    ) -> "BaselineReport":
        return cls(
            origin=origin,
            entries=entries,
            expected_failures=list(expected_failures),
            exclusions=exclusions_map.to_dict(),
        )

    @property
    def excluded_count(self) -> int:
        return sum(len(ports) for ports in self.exclusions.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "origin": self.origin,
            "entries": self.entries,
            "expected_failures": [spec.to_dict() for spec in self.expected_failures],
            "exclusions": self.exclusions,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass
class ReportConfig:
    """Configuration for report generation."""

    show_exclusions: bool = True
    output_path: Optional[Path] = None


class BaseReporter(ABC):
    """
    Abstract base class for report generators.

    Subclasses implement specific output formats.
    """

    def __init__(self, config: Optional[ReportConfig] = None) -> None:
        self.config = config or ReportConfig()

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Get the format name (e.g., 'json', 'console')."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Get the default file extension."""
        ...

    @abstractmethod
    def generate(self, report: BaselineReport) -> str:
        """
        Generate the report content.

        Args:
            report: The report to render.

        Returns:
            The report as a string.
        """
        ...

    def write(self, report: BaselineReport, output_path: Optional[Path] = None) -> Path:
        """
        Generate and write the report to a file.

        Args:
            report: The report to render.
            output_path: Output file path. If None, uses config or generates default.

        Returns:
            The path to the written file.
        """
        path = output_path or self.config.output_path
        if path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            path = Path(f"ci_baseline_report_{timestamp}{self.file_extension}")

        path.write_text(self.generate(report), encoding="utf-8")
        return path


class ReporterRegistry:
    """Registry for available reporters."""

    _reporters: dict[str, type[BaseReporter]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a reporter."""
        def decorator(reporter_class: type[BaseReporter]) -> type[BaseReporter]:
            cls._reporters[name] = reporter_class
            return reporter_class
        return decorator

    @classmethod
    def get(cls, name: str) -> Optional[type[BaseReporter]]:
        """Get a reporter by name."""
        return cls._reporters.get(name)

    @classmethod
    def list_formats(cls) -> list[str]:
        """List available format names."""
        return list(cls._reporters.keys())

    @classmethod
    def create(cls, name: str, config: Optional[ReportConfig] = None) -> Optional[BaseReporter]:
        """Create a reporter instance by name."""
        reporter_class = cls.get(name)
        if reporter_class:
            return reporter_class(config=config)
        return None
