"""
Similarity grouping: assigns every track a canonical song key.

Runs the resolver twice. The first pass resolves each track in isolation and
only serves to count how many tracks land on each key; the second pass
resolves again with those counts available, so a title that is well
established across the library can claim its fragment in noisy filenames.
Only the second pass is returned.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from variant_shuffle.logging_utils import format_count, truncate_list
from variant_shuffle.titles.resolver import SongTitleResolver, filename_stem
from variant_shuffle.tracks import NormalizedTrack, Track

logger = logging.getLogger(__name__)

DEFAULT_REPORT_EXAMPLES = 3


@dataclass(frozen=True)
class GroupingResult:
    """
    Attributes:
        tracks: Input tracks paired with their canonical key, in input order
        groups: Canonical key -> member tracks, in first-seen order
    """
    tracks: List[NormalizedTrack]
    groups: Dict[str, List[NormalizedTrack]] = field(default_factory=dict)

    def variant_groups(self) -> List[Tuple[str, List[NormalizedTrack]]]:
        """Keys with more than one member, largest first (stable on ties)."""
        multi = [(key, members) for key, members in self.groups.items() if len(members) > 1]
        return sorted(multi, key=lambda item: len(item[1]), reverse=True)

    def get_stats(self) -> Dict[str, int]:
        variants = self.variant_groups()
        return {
            'tracks': len(self.tracks),
            'distinct_titles': len(self.groups),
            'variant_groups': len(variants),
            'tracks_in_variant_groups': sum(len(m) for _, m in variants),
        }


class SimilarityGrouper:
    """Two-pass grouping of tracks by resolved song title."""

    def __init__(self, resolver: Optional[SongTitleResolver] = None, report_examples: int = DEFAULT_REPORT_EXAMPLES):
        self.resolver = resolver or SongTitleResolver()
        self.report_examples = report_examples

    def _provisional_groups(self, tracks: Sequence[Track]) -> Dict[str, List[Track]]:
        groups: Dict[str, List[Track]] = {}
        for track in tracks:
            key = self.resolver.resolve(track.path, {})
            groups.setdefault(key, []).append(track)
        return groups

    def group(self, tracks: Sequence[Track]) -> GroupingResult:
        provisional = self._provisional_groups(tracks)
        logger.debug("Pass 1: %s", format_count(len(provisional), "provisional title"))

        normalized: List[NormalizedTrack] = []
        groups: Dict[str, List[NormalizedTrack]] = OrderedDict()
        for track in tracks:
            key = self.resolver.resolve(track.path, provisional)
            item = NormalizedTrack(path=track.path, normalized_title=key, source_track=track)
            normalized.append(item)
            groups.setdefault(key, []).append(item)

        result = GroupingResult(tracks=normalized, groups=dict(groups))
        self.log_report(result)
        return result

    def log_report(self, result: GroupingResult) -> None:
        """Log keys shared by several tracks with a few example filenames."""
        variants = result.variant_groups()
        if not variants:
            logger.info("No songs with multiple versions found among %s", format_count(len(result.tracks), "track"))
            return

        logger.info(
            "Found %s with multiple versions (%s)",
            format_count(len(variants), "song"),
            format_count(sum(len(m) for _, m in variants), "track"),
        )
        for key, members in variants:
            examples = [filename_stem(m.path) for m in members]
            logger.info(
                "  %-40s %3d  %s",
                key or "(empty title)",
                len(members),
                truncate_list(examples, max_items=self.report_examples),
            )
