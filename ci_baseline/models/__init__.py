"""Data models for baseline entries, triplets and exclusions."""

from ci_baseline.models.base import (
    CiBaselineState,
    PackageSpec,
    SortedStrings,
    Triplet,
    parse_triplet_name,
)
from ci_baseline.models.baseline import (
    CiBaselineLine,
    ExclusionPredicate,
    ExclusionsMap,
    TripletExclusions,
)

__all__ = [
    # Base types
    "CiBaselineState",
    "PackageSpec",
    "SortedStrings",
    "Triplet",
    "parse_triplet_name",
    # Baseline
    "CiBaselineLine",
    "ExclusionPredicate",
    "ExclusionsMap",
    "TripletExclusions",
]
