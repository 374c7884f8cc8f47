"""
Apply parsed baseline entries to the tracked triplets.

``skip`` entries extend the exclusion set of their triplet; ``fail`` entries
become expected failures. Entries for triplets that are not tracked are
ignored, and no new triplets are ever added to the map.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ci_baseline.models.base import CiBaselineState, PackageSpec
from ci_baseline.models.baseline import CiBaselineLine, ExclusionsMap
from ci_baseline.utils.logging import get_logger

logger = get_logger("apply", parent="core")


class SkipFailures(Enum):
    """Whether expected failures should also be excluded from the build."""

    NO = "no"
    YES = "yes"


def parse_and_apply_ci_baseline(
    lines: Iterable[CiBaselineLine],
    exclusions_map: ExclusionsMap,
    skip_failures: SkipFailures = SkipFailures.NO,
) -> list[PackageSpec]:
    """
    Apply baseline entries to an exclusions map.

    Args:
        lines: Parsed baseline entries, in file order.
        exclusions_map: Tracked triplets; updated in place.
        skip_failures: With ``SkipFailures.YES``, tracked ``fail`` entries
            are excluded as well as reported.

    Returns:
        Sorted, duplicate-free expected failures on tracked triplets.
    """
    expected_failures: set[PackageSpec] = set()
    skipped = 0
    ignored = 0

    for line in lines:
        entry = exclusions_map.find(line.triplet)
        if entry is None:
            ignored += 1
            continue

        if line.state == CiBaselineState.SKIP:
            if entry.exclusions.insert(line.port_name):
                skipped += 1
        elif line.state == CiBaselineState.FAIL:
            expected_failures.add(PackageSpec(line.port_name, line.triplet))
            if skip_failures == SkipFailures.YES and entry.exclusions.insert(line.port_name):
                skipped += 1

    logger.debug(
        "Applied baseline",
        expected_failures=len(expected_failures),
        new_exclusions=skipped,
        untracked=ignored,
    )
    return sorted(expected_failures)
