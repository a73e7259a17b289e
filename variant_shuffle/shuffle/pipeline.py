"""
Shuffle pipeline: tracks -> title groups -> constrained shuffle -> audit.

Pass-through mode skips grouping and shuffling and returns the input order,
truncated to the target count when one is given.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from variant_shuffle.errors import InputEmptyError
from variant_shuffle.logging_utils import stage_timer
from variant_shuffle.shuffle.audit import AuditReport, audit_shuffle
from variant_shuffle.shuffle.distribution import TrackDistribution, compute_distribution
from variant_shuffle.shuffle.options import ShuffleOptions
from variant_shuffle.shuffle.shuffler import ConstrainedShuffler, ShuffleResult
from variant_shuffle.titles.grouping import GroupingResult, SimilarityGrouper
from variant_shuffle.tracks import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """
    Attributes:
        tracks: Ordered output (what the playlist writer consumes)
        grouping: Title groups (None in pass-through mode)
        shuffle: Raw shuffle result (None in pass-through mode)
        audit: Quality report (None in pass-through mode)
        distribution: Per-path statistics (empty in pass-through mode)
    """
    tracks: List[Track]
    grouping: Optional[GroupingResult] = None
    shuffle: Optional[ShuffleResult] = None
    audit: Optional[AuditReport] = None
    distribution: List[TrackDistribution] = field(default_factory=list)

    @property
    def paths(self) -> List[str]:
        return [t.path for t in self.tracks]

    @property
    def relaxed_slots(self) -> List[int]:
        return list(self.shuffle.relaxed_slots) if self.shuffle else []


def passthrough(tracks: Sequence[Track], target_count: Optional[int] = None) -> List[Track]:
    if target_count is None:
        return list(tracks)
    return list(tracks[:target_count])


def run_pipeline(
    tracks: Sequence[Track],
    options: Optional[ShuffleOptions] = None,
    *,
    grouper: Optional[SimilarityGrouper] = None,
    rng: Optional[np.random.Generator] = None,
) -> PipelineResult:
    """
    Reorder tracks so versions of the same song are spread apart.

    Args:
        tracks: Input tracks (blank paths already dropped)
        options: Shuffle options; validated before any work
        grouper: Title grouper (default resolver and word lists if omitted)
        rng: Random source; built from options.seed if omitted

    Raises:
        InvalidConfigurationError: contradictory or out-of-range options
        InputEmptyError: no tracks
    """
    options = (options or ShuffleOptions()).validate()
    if not tracks:
        raise InputEmptyError()

    if options.passthrough:
        output = passthrough(tracks, options.target_count)
        logger.info("Pass-through mode: keeping input order for %d tracks", len(output))
        return PipelineResult(tracks=output)

    if rng is None:
        rng = np.random.default_rng(options.seed)
    grouper = grouper or SimilarityGrouper()
    target_count = options.target_count or len(tracks)
    min_distance = options.effective_min_distance

    with stage_timer("Title grouping", logger):
        grouping = grouper.group(tracks)

    shuffler = ConstrainedShuffler(
        min_distance=min_distance,
        max_attempts=options.max_attempts,
        rng=rng,
    )
    with stage_timer("Constrained shuffle", logger):
        result = shuffler.shuffle(grouping.tracks, target_count)

    with stage_timer("Quality audit", logger):
        report = audit_shuffle(result.placements, min_distance)

    distribution = compute_distribution(grouping.tracks, result) if options.wants_distribution else []

    return PipelineResult(
        tracks=[p.track.source_track for p in result.placements],
        grouping=grouping,
        shuffle=result,
        audit=report,
        distribution=distribution,
    )
