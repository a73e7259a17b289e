"""
Cumulative-weight index for weighted sampling without expanding weights.

boundaries[0] == 0, boundaries[i+1] - boundaries[i] == weight of track i,
boundaries[-1] == total weight. A virtual position v in [0, total) belongs to
the unique i with boundaries[i] <= v < boundaries[i+1].
"""
from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from variant_shuffle.tracks import DEFAULT_WEIGHT


def build_boundaries(weights: Iterable[float]) -> np.ndarray:
    """Prefix sums of max(1, weight), with a leading zero."""
    clamped = np.maximum(np.asarray(list(weights), dtype=float), DEFAULT_WEIGHT)
    return np.concatenate(([0.0], np.cumsum(clamped)))


def lookup(boundaries: np.ndarray, v: float) -> int:
    """Index of the track owning virtual position v (binary search)."""
    return int(np.searchsorted(boundaries, v, side="right")) - 1


class WeightedIndex:
    """Weighted sampler over a fixed sequence of items exposing `.weight`."""

    def __init__(self, boundaries: np.ndarray):
        if len(boundaries) < 2:
            raise ValueError("WeightedIndex needs at least one item")
        self.boundaries = boundaries

    @classmethod
    def build(cls, items: Sequence) -> "WeightedIndex":
        return cls(build_boundaries(item.weight for item in items))

    @property
    def total_weight(self) -> float:
        return float(self.boundaries[-1])

    def __len__(self) -> int:
        return len(self.boundaries) - 1

    def weight_of(self, index: int) -> float:
        return float(self.boundaries[index + 1] - self.boundaries[index])

    def lookup(self, v: float) -> int:
        return lookup(self.boundaries, v)

    def sample(self, rng: np.random.Generator) -> int:
        """Draw an index with probability proportional to its weight."""
        return min(self.lookup(rng.random() * self.total_weight), len(self) - 1)
