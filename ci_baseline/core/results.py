"""
Compare CI build results against the baseline.

A package that fails without being listed as ``fail`` is a regression. A
package listed as ``fail`` that builds fine should be removed from the
baseline, unless unexpected passes are allowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from ci_baseline.models.base import PackageSpec


class BuildResult(Enum):
    """Outcome of building one package in CI."""

    SUCCEEDED = "SUCCEEDED"
    BUILD_FAILED = "BUILD_FAILED"
    POST_BUILD_CHECKS_FAILED = "POST_BUILD_CHECKS_FAILED"
    FILE_CONFLICTS = "FILE_CONFLICTS"
    CASCADED_DUE_TO_MISSING_DEPENDENCIES = "CASCADED_DUE_TO_MISSING_DEPENDENCIES"
    EXCLUDED = "EXCLUDED"
    REMOVED = "REMOVED"
    DOWNLOADED = "DOWNLOADED"
    CACHE_MISSING = "CACHE_MISSING"

    @classmethod
    def from_string(cls, value: str) -> "BuildResult":
        """Create BuildResult from string, case-insensitive, '-' or '_' separated."""
        return cls(value.strip().upper().replace("-", "_"))

    @property
    def is_failure(self) -> bool:
        return self in _FAILING_RESULTS


_FAILING_RESULTS = frozenset(
    {
        BuildResult.BUILD_FAILED,
        BuildResult.POST_BUILD_CHECKS_FAILED,
        BuildResult.FILE_CONFLICTS,
    }
)


@dataclass
class CiBaselineData:
    """Baseline-derived expectations for one CI run."""

    expected_failures: list[PackageSpec] = field(default_factory=list)

    @classmethod
    def from_failures(cls, failures: Iterable[PackageSpec]) -> "CiBaselineData":
        return cls(expected_failures=sorted(set(failures)))

    def is_expected_failure(self, spec: PackageSpec) -> bool:
        return spec in self.expected_failures


def format_ci_result(
    spec: PackageSpec,
    result: BuildResult,
    data: CiBaselineData,
    baseline_path: Optional[Union[str, Path]] = None,
    allow_unexpected_passing: bool = False,
) -> Optional[str]:
    """
    Describe a build result that disagrees with the baseline.

    Args:
        spec: The package that was built.
        result: Its build result.
        data: Expectations derived from the baseline.
        baseline_path: Baseline file to mention in the message, if any.
        allow_unexpected_passing: Don't report expected failures that passed.

    Returns:
        A message for regressions and unexpected passes, otherwise None.
    """
    if result.is_failure:
        if data.is_expected_failure(spec):
            return None
        if baseline_path is None:
            return f"REGRESSION: {spec} failed with {result.value}."
        return f"REGRESSION: {spec} failed with {result.value}. If expected, add {spec}=fail to {baseline_path}."

    if result == BuildResult.SUCCEEDED and not allow_unexpected_passing and data.is_expected_failure(spec):
        if baseline_path is None:
            return f"PASSING, REMOVE FROM FAIL LIST: {spec}."
        return f"PASSING, REMOVE FROM FAIL LIST: {spec} ({baseline_path})."

    return None
