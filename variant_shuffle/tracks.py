"""
Track records shared by the grouping and shuffling stages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_WEIGHT = 1.0


def coerce_weight(value: Any) -> float:
    """
    Coerce a raw weight (number, numeric string, blank, None) to a usable weight.

    Missing, blank, unparseable or non-positive values become 1; anything
    else is clamped to at least 1.
    """
    if value is None:
        return DEFAULT_WEIGHT
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return DEFAULT_WEIGHT
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT
    if weight != weight or weight <= 0:  # NaN or non-positive
        return DEFAULT_WEIGHT
    return max(DEFAULT_WEIGHT, weight)


@dataclass(frozen=True)
class Track:
    """One input record. Identity is the path; duplicates are placed independently."""
    path: str
    weight: float = DEFAULT_WEIGHT
    original_row: Optional[Any] = None

    @classmethod
    def from_raw(cls, path: str, weight: Any = None, original_row: Any = None) -> "Track":
        return cls(path=path, weight=coerce_weight(weight), original_row=original_row)


@dataclass(frozen=True)
class NormalizedTrack:
    path: str
    normalized_title: str
    source_track: Track

    @property
    def weight(self) -> float:
        return self.source_track.weight


@dataclass(frozen=True)
class PlacementRecord:
    slot_index: int
    track: NormalizedTrack

    @property
    def path(self) -> str:
        return self.track.path

    @property
    def normalized_title(self) -> str:
        return self.track.normalized_title
