"""Tests for the shuffle quality audit and distribution statistics."""
import logging

import pytest

from variant_shuffle.shuffle.audit import AuditReport, audit_shuffle
from variant_shuffle.shuffle.distribution import compute_distribution
from variant_shuffle.shuffle.shuffler import ShuffleResult
from variant_shuffle.tracks import NormalizedTrack, PlacementRecord, Track


def normalized(path, title, weight=1):
    return NormalizedTrack(path=path, normalized_title=title, source_track=Track.from_raw(path, weight))


def placements_for(items):
    return [PlacementRecord(slot_index=i, track=t) for i, t in enumerate(items)]


class TestAudit:
    """Tests for audit_shuffle."""

    def test_finds_close_pairs(self):
        a, b, c = normalized("a.mp3", "a"), normalized("b.mp3", "b"), normalized("c.mp3", "c")
        report = audit_shuffle(placements_for([a, b, a, c, a]), 3)

        assert [(v.first_slot, v.second_slot) for v in report.violations] == [(0, 2), (2, 4)]
        assert report.violation_count == 2
        assert report.min_observed_distance == 2
        assert report.summary() == "2 violations, minimum distance 2 (required 3)"

    def test_different_paths_same_title_count(self):
        v1, v2 = normalized("x/Song.mp3", "song"), normalized("y/Song.mp3", "song")
        report = audit_shuffle(placements_for([v1, v2]), 2)
        assert [(v.first_slot, v.second_slot, v.title) for v in report.violations] == [(0, 1, "song")]

    def test_clean_shuffle(self, caplog):
        a, b = normalized("a.mp3", "a"), normalized("b.mp3", "b")
        with caplog.at_level(logging.INFO, logger="variant_shuffle.shuffle.audit"):
            report = audit_shuffle(placements_for([a, b, a, b]), 2)

        assert report.violations == []
        assert report.min_observed_distance is None
        assert report.summary() == "no violations"
        assert "no violations" in caplog.text

    @pytest.mark.parametrize("min_distance", [0, 1])
    def test_trivial_distance_never_violates(self, min_distance):
        a = normalized("a.mp3", "a")
        assert audit_shuffle(placements_for([a, a, a]), min_distance).violations == []

    def test_violations_are_logged_as_warning(self, caplog):
        a = normalized("a.mp3", "a")
        with caplog.at_level(logging.WARNING, logger="variant_shuffle.shuffle.audit"):
            audit_shuffle(placements_for([a, a]), 5)
        assert "1 violation, minimum distance 1 (required 5)" in caplog.text

    def test_empty_report(self):
        assert AuditReport(min_distance=5).violation_count == 0


class TestDistribution:
    """Tests for compute_distribution."""

    def _result(self, items):
        placements = placements_for(items)
        indexes = {}
        for p in placements:
            indexes.setdefault(p.path, []).append(p.slot_index)
        return ShuffleResult(placements=placements, placement_indexes=indexes)

    def test_counts_and_deltas(self):
        a, b = normalized("a.mp3", "a", 3), normalized("b.mp3", "b", 1)
        rows = compute_distribution([a, b], self._result([a, b, a, a]))

        row_a, row_b = rows
        assert row_a.path == "a.mp3"
        assert row_a.count == 3
        assert row_a.expected == pytest.approx(0.75)
        assert row_a.observed == pytest.approx(0.75)
        assert (row_a.first_delta, row_a.last_delta) == (0, 0)
        assert row_a.average_delta == pytest.approx(1.5)
        assert row_a.indexes == [0, 2, 3]

        assert row_b.count == 1
        assert (row_b.first_delta, row_b.last_delta) == (1, 2)
        assert row_b.average_delta is None

    def test_unplaced_track_has_no_deltas(self):
        a, c = normalized("a.mp3", "a"), normalized("c.mp3", "c")
        rows = compute_distribution([a, c], self._result([a, a]))
        row_c = rows[1]
        assert row_c.count == 0
        assert row_c.observed == 0.0
        assert row_c.expected == pytest.approx(0.5)
        assert (row_c.first_delta, row_c.last_delta, row_c.average_delta) == (None, None, None)

    def test_duplicate_paths_pool_weight(self):
        a1, a2, b = normalized("a.mp3", "a", 2), normalized("a.mp3", "a", 2), normalized("b.mp3", "b", 4)
        rows = compute_distribution([a1, a2, b], self._result([a1, b]))
        assert [r.path for r in rows] == ["a.mp3", "b.mp3"]
        assert rows[0].expected == pytest.approx(0.5)
