"""
Per-track placement statistics: how often each path was drawn versus how
often its weight says it should have been, and how evenly it was spread.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from variant_shuffle.shuffle.shuffler import ShuffleResult
from variant_shuffle.tracks import NormalizedTrack


@dataclass(frozen=True)
class TrackDistribution:
    path: str
    count: int
    expected: float
    observed: float
    first_delta: Optional[int]
    last_delta: Optional[int]
    average_delta: Optional[float]
    indexes: List[int]


def compute_distribution(tracks: Sequence[NormalizedTrack], result: ShuffleResult) -> List[TrackDistribution]:
    """
    One row per distinct input path, in input order.

    Duplicate paths pool their weights. Rows for paths never placed carry a
    zero count and no deltas.
    """
    weights: Dict[str, float] = {}
    for track in tracks:
        weights[track.path] = weights.get(track.path, 0.0) + track.weight
    total_weight = sum(weights.values())
    total_slots = len(result.placements)

    rows = []
    for path, weight in weights.items():
        indexes = result.placement_indexes.get(path, [])
        count = len(indexes)
        first_delta = last_delta = average_delta = None
        if indexes:
            first_delta = indexes[0]
            last_delta = (total_slots - 1) - indexes[-1]
        if count > 1:
            gaps = [b - a for a, b in zip(indexes, indexes[1:])]
            average_delta = sum(gaps) / len(gaps)
        rows.append(TrackDistribution(
            path=path,
            count=count,
            expected=weight / total_weight if total_weight else 0.0,
            observed=count / total_slots if total_slots else 0.0,
            first_delta=first_delta,
            last_delta=last_delta,
            average_delta=average_delta,
            indexes=list(indexes),
        ))
    return rows
