"""Tests for two-pass similarity grouping."""
import logging

from variant_shuffle.titles.grouping import SimilarityGrouper
from variant_shuffle.tracks import Track


class TestGrouping:
    """Tests for SimilarityGrouper.group."""

    def test_versions_share_a_key(self, christmas_tracks):
        result = SimilarityGrouper().group(christmas_tracks)

        assert [t.normalized_title for t in result.tracks] == [
            "run rudolph run",
            "run rudolph run",
            "run rudolph run",
            "white christmas",
            "white christmas",
            "silent night",
        ]
        assert list(result.groups) == ["run rudolph run", "white christmas", "silent night"]

    def test_tracks_keep_input_order_and_source(self, christmas_tracks):
        result = SimilarityGrouper().group(christmas_tracks)
        assert [t.path for t in result.tracks] == [t.path for t in christmas_tracks]
        assert all(n.source_track is t for n, t in zip(result.tracks, christmas_tracks))

    def test_variant_groups_largest_first(self, christmas_tracks):
        result = SimilarityGrouper().group(christmas_tracks)
        variants = result.variant_groups()
        assert [(key, len(members)) for key, members in variants] == [
            ("run rudolph run", 3),
            ("white christmas", 2),
        ]

    def test_stats(self, christmas_tracks):
        stats = SimilarityGrouper().group(christmas_tracks).get_stats()
        assert stats == {
            'tracks': 6,
            'distinct_titles': 3,
            'variant_groups': 2,
            'tracks_in_variant_groups': 5,
        }

    def test_established_title_claims_noisy_filename(self):
        tracks = [
            Track.from_raw("Album A/Wonderland.mp3"),
            Track.from_raw("Album B/Wonderland.mp3"),
            Track.from_raw("Album C/Holiday Party Megamix - Wonderland.mp3"),
        ]
        result = SimilarityGrouper().group(tracks)
        assert [t.normalized_title for t in result.tracks] == ["wonderland"] * 3
        assert list(result.groups) == ["wonderland"]

    def test_numeric_title_shares_one_key(self):
        tracks = [
            Track.from_raw("Xmas/12 Days Of Christmas - Bing Crosby.mp3"),
            Track.from_raw("Xmas/Andy Williams - 12 Days Of Christmas.mp3"),
            Track.from_raw("Xmas/07 - 12 Days Of Christmas - Perry Como.mp3"),
        ]
        result = SimilarityGrouper().group(tracks)
        assert [t.normalized_title for t in result.tracks] == ["12 days of christmas"] * 3

    def test_isolated_resolution_without_support(self):
        tracks = [
            Track.from_raw("Album A/Wonderland.mp3"),
            Track.from_raw("Album C/Holiday Party Megamix - Snowfall.mp3"),
        ]
        result = SimilarityGrouper().group(tracks)
        assert result.tracks[1].normalized_title == "holiday party megamix"

    def test_duplicate_paths_are_separate_members(self):
        tracks = [Track.from_raw("Silent Night.mp3"), Track.from_raw("Silent Night.mp3")]
        result = SimilarityGrouper().group(tracks)
        assert len(result.groups["silent night"]) == 2

    def test_empty_input(self):
        result = SimilarityGrouper().group([])
        assert result.tracks == []
        assert result.groups == {}


class TestGroupingReport:
    """Tests for the logged grouping report."""

    def test_report_lists_variant_groups(self, christmas_tracks, caplog):
        with caplog.at_level(logging.INFO, logger="variant_shuffle.titles.grouping"):
            SimilarityGrouper(report_examples=1).group(christmas_tracks)

        assert "Found 2 songs with multiple versions (5 tracks)" in caplog.text
        assert "run rudolph run" in caplog.text
        assert "(+2 more)" in caplog.text

    def test_report_without_variants(self, caplog):
        with caplog.at_level(logging.INFO, logger="variant_shuffle.titles.grouping"):
            SimilarityGrouper().group([Track.from_raw("Silent Night.mp3")])

        assert "No songs with multiple versions found among 1 track" in caplog.text
