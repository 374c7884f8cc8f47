"""
Baseline records and per-triplet exclusion tracking.

These models represent:
- CiBaselineLine: One parsed ``port:triplet=state`` entry
- TripletExclusions: Ports excluded from CI for one tracked triplet
- ExclusionsMap: All tracked triplets, in insertion order
- ExclusionPredicate: Read-only "is this package excluded?" test
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ci_baseline.models.base import CiBaselineState, PackageSpec, SortedStrings, Triplet


@dataclass(frozen=True)
class CiBaselineLine:
    """Single entry of a baseline file."""

    port_name: str
    triplet: Triplet
    state: CiBaselineState

    def __str__(self) -> str:
        return f"{self.port_name}:{self.triplet}={self.state.value}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "port_name": self.port_name,
            "triplet": self.triplet.canonical_name,
            "state": self.state.value,
        }


@dataclass
class TripletExclusions:
    """Ports that CI should not build for one triplet."""

    triplet: Triplet
    exclusions: SortedStrings = field(default_factory=SortedStrings)


class ExclusionsMap:
    """
    Tracked triplets and their exclusion sets.

    Entries keep insertion order, and a triplet is never stored twice.
    The number of tracked triplets is small, so lookups are linear.
    """

    def __init__(self) -> None:
        self.triplets: list[TripletExclusions] = []

    def insert(self, triplet: Triplet, exclusions: Optional[Iterable[str]] = None) -> None:
        """
        Start tracking a triplet.

        Args:
            triplet: Triplet to track.
            exclusions: Optional initial exclusion set.

        Does nothing if the triplet is already tracked.
        """
        if self.find(triplet) is not None:
            return
        self.triplets.append(TripletExclusions(triplet, SortedStrings(exclusions or ())))

    def find(self, triplet: Triplet) -> Optional[TripletExclusions]:
        """Get the entry for a triplet, or None if it is not tracked."""
        for entry in self.triplets:
            if entry.triplet == triplet:
                return entry
        return None

    def __contains__(self, triplet: object) -> bool:
        return isinstance(triplet, Triplet) and self.find(triplet) is not None

    def __len__(self) -> int:
        return len(self.triplets)

    def to_dict(self) -> dict[str, list[str]]:
        """Serialize to dictionary, preserving insertion order."""
        return {entry.triplet.canonical_name: entry.exclusions.to_list() for entry in self.triplets}


class ExclusionPredicate:
    """Tests whether a package is excluded. Does not own the map."""

    def __init__(self, data: ExclusionsMap) -> None:
        self.data = data

    def __call__(self, spec: PackageSpec) -> bool:
        entry = self.data.find(spec.triplet)
        if entry is None:
            return False
        return spec.name in entry.exclusions
