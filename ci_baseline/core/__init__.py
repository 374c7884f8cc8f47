"""Core module containing configuration, baseline application and result checks."""

from ci_baseline.core.apply import SkipFailures, parse_and_apply_ci_baseline
from ci_baseline.core.config import CiBaselineConfig, validate_config
from ci_baseline.core.results import BuildResult, CiBaselineData, format_ci_result

__all__ = [
    "CiBaselineConfig",
    "validate_config",
    # Apply
    "SkipFailures",
    "parse_and_apply_ci_baseline",
    # Results
    "BuildResult",
    "CiBaselineData",
    "format_ci_result",
]
