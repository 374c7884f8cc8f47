"""
Core value types used throughout ci-baseline.

This module defines the fundamental data types for:
- Baseline states (fail / skip)
- Triplets and the triplet-name validator
- Package specs (port + triplet)
- Sorted, duplicate-free string collections
"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

_TRIPLET_NAME_RE = re.compile(r"[a-z0-9][a-z0-9-]*")


class CiBaselineState(Enum):
    """Expected CI state of a port on a triplet."""

    FAIL = "fail"
    SKIP = "skip"


@dataclass(frozen=True, order=True)
class Triplet:
    """A target build configuration, e.g. ``x64-windows``."""

    canonical_name: str

    @classmethod
    def from_canonical_name(cls, name: str) -> "Triplet":
        """Create a Triplet, normalizing the name to lowercase."""
        return cls(canonical_name=name.lower())

    def __str__(self) -> str:
        return self.canonical_name


def parse_triplet_name(text: str) -> Optional[Triplet]:
    """
    Validate a candidate triplet name.

    Args:
        text: Candidate name, exactly as it appears in the input.

    Returns:
        The Triplet, or None if the name is empty or not a valid triplet name.
    """
    if not text or not _TRIPLET_NAME_RE.fullmatch(text):
        return None
    return Triplet.from_canonical_name(text)


@dataclass(frozen=True, order=True)
class PackageSpec:
    """A port built for a specific triplet."""

    name: str
    triplet: Triplet

    def __str__(self) -> str:
        return f"{self.name}:{self.triplet}"

    def to_dict(self) -> dict[str, str]:
        """Serialize to dictionary."""
        return {"name": self.name, "triplet": self.triplet.canonical_name}


class SortedStrings:
    """
    Sorted, duplicate-free collection of strings.

    Insertion order is irrelevant; iteration is always in sorted order.
    """

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._items: list[str] = sorted(set(values))

    def insert(self, value: str) -> bool:
        """Insert a value, returning False if it was already present."""
        index = bisect_left(self._items, value)
        if index < len(self._items) and self._items[index] == value:
            return False
        self._items.insert(index, value)
        return True

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        index = bisect_left(self._items, value)
        return index < len(self._items) and self._items[index] == value

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SortedStrings):
            return self._items == other._items
        if isinstance(other, (list, tuple, set, frozenset)):
            return self._items == sorted(set(other))
        return NotImplemented

    def __repr__(self) -> str:
        return f"SortedStrings({self._items!r})"

    def to_list(self) -> list[str]:
        """Return the values as a new sorted list."""
        return list(self._items)
