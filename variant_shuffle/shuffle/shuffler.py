"""
Constrained weighted shuffle.

Draws tracks with probability proportional to their weight and accepts a
draw only if its song title has not been placed within the last
`min_distance` slots. After `max_attempts` consecutive rejected draws the
next draw is placed regardless; that slot is recorded as a relaxation.
Draws are with replacement, so a track can appear several times when the
target count exceeds the input or a heavy track is drawn repeatedly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from variant_shuffle.logging_utils import format_count
from variant_shuffle.shuffle.weighted_index import WeightedIndex
from variant_shuffle.tracks import NormalizedTrack, PlacementRecord

logger = logging.getLogger(__name__)

DEFAULT_MIN_DISTANCE = 5
MAX_FAILED_ATTEMPTS = 100


@dataclass(frozen=True)
class ShuffleResult:
    """
    Attributes:
        placements: Output sequence, slot_index == position
        relaxed_slots: Slots filled by a draw that broke the distance rule
        placement_indexes: Path -> slot indices where that path was placed
    """
    placements: List[PlacementRecord]
    relaxed_slots: List[int] = field(default_factory=list)
    placement_indexes: Dict[str, List[int]] = field(default_factory=dict)

    @property
    def placement_counts(self) -> Dict[str, int]:
        return {path: len(slots) for path, slots in self.placement_indexes.items()}

    @property
    def paths(self) -> List[str]:
        return [p.path for p in self.placements]


class ConstrainedShuffler:
    """Weighted random placement with a minimum same-title distance."""

    def __init__(
        self,
        min_distance: int = DEFAULT_MIN_DISTANCE,
        max_attempts: int = MAX_FAILED_ATTEMPTS,
        rng: Optional[np.random.Generator] = None,
    ):
        self.min_distance = min_distance
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else np.random.default_rng()

    def is_eligible(self, title: str, slot: int, last_used: Dict[str, int]) -> bool:
        last = last_used.get(title)
        return last is None or slot - last >= self.min_distance

    def shuffle(self, tracks: Sequence[NormalizedTrack], target_count: int) -> ShuffleResult:
        """
        Produce exactly `target_count` placements drawn from `tracks`.

        Raises:
            ValueError: if tracks is empty
        """
        index = WeightedIndex.build(tracks)
        last_used: Dict[str, int] = {}
        placements: List[PlacementRecord] = []
        relaxed: List[int] = []
        placement_indexes: Dict[str, List[int]] = {}
        failed = 0

        while len(placements) < target_count:
            track = tracks[index.sample(self.rng)]
            slot = len(placements)
            title = track.normalized_title

            eligible = self.is_eligible(title, slot, last_used)
            if not eligible and failed <= self.max_attempts:
                failed += 1
                continue

            if not eligible:
                relaxed.append(slot)
                logger.debug(
                    "Relaxed distance at slot %d after %d attempts: %r last placed at %d",
                    slot, failed, title, last_used[title],
                )

            placements.append(PlacementRecord(slot_index=slot, track=track))
            last_used[title] = slot
            placement_indexes.setdefault(track.path, []).append(slot)
            failed = 0

        if relaxed:
            logger.warning(
                "Distance constraint (%d) relaxed for %s",
                self.min_distance, format_count(len(relaxed), "placement"),
            )
        logger.info(
            "Placed %s from %s",
            format_count(len(placements), "slot"),
            format_count(len(tracks), "track"),
        )
        return ShuffleResult(
            placements=placements,
            relaxed_slots=relaxed,
            placement_indexes=placement_indexes,
        )
