"""
ci-baseline - expected CI build states per port and triplet.

Parses baseline files of ``port:triplet=(fail|skip)`` entries and applies
them to the triplets a CI run tracks.
"""

__version__ = "1.0.0"

from ci_baseline.core.apply import SkipFailures, parse_and_apply_ci_baseline
from ci_baseline.models import (
    CiBaselineLine,
    CiBaselineState,
    ExclusionPredicate,
    ExclusionsMap,
    PackageSpec,
    Triplet,
    TripletExclusions,
)
from ci_baseline.parsing import BaselineParseError, ParseMessages, load_ci_baseline, parse_ci_baseline

__all__ = [
    "__version__",
    "BaselineParseError",
    "CiBaselineLine",
    "CiBaselineState",
    "ExclusionPredicate",
    "ExclusionsMap",
    "PackageSpec",
    "ParseMessages",
    "SkipFailures",
    "Triplet",
    "TripletExclusions",
    "load_ci_baseline",
    "parse_and_apply_ci_baseline",
    "parse_ci_baseline",
]
