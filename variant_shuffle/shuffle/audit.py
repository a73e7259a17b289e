"""
Post-hoc shuffle quality check: finds every pair of same-title slots closer
than the minimum distance. Read-only; the findings are informational.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from variant_shuffle.logging_utils import format_count
from variant_shuffle.tracks import PlacementRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    first_slot: int
    second_slot: int
    title: str

    @property
    def distance(self) -> int:
        return self.second_slot - self.first_slot


@dataclass(frozen=True)
class AuditReport:
    min_distance: int
    violations: List[Violation] = field(default_factory=list)

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @property
    def min_observed_distance(self) -> Optional[int]:
        if not self.violations:
            return None
        return min(v.distance for v in self.violations)

    def summary(self) -> str:
        if not self.violations:
            return "no violations"
        return (
            f"{format_count(self.violation_count, 'violation')}, "
            f"minimum distance {self.min_observed_distance} (required {self.min_distance})"
        )


def audit_shuffle(placements: Sequence[PlacementRecord], min_distance: int) -> AuditReport:
    """Scan forward from each slot over the next min_distance - 1 slots."""
    violations: List[Violation] = []
    end = len(placements)
    for i, placement in enumerate(placements):
        title = placement.normalized_title
        for j in range(i + 1, min(i + min_distance, end)):
            if placements[j].normalized_title == title:
                violations.append(Violation(first_slot=i, second_slot=j, title=title))

    report = AuditReport(min_distance=min_distance, violations=violations)
    if violations:
        logger.warning("Shuffle quality: %s", report.summary())
        for v in violations:
            logger.debug("  slots %d..%d (%d apart): %r", v.first_slot, v.second_slot, v.distance, v.title)
    else:
        logger.info("Shuffle quality: no violations (min distance %d)", min_distance)
    return report
