# -*- coding: utf-8 -*-
"""
Variant Shuffle - Main Application
Reorders a track list so that different versions of the same song are spread apart
"""
import argparse
import logging
import sys

from variant_shuffle.config_loader import Config
from variant_shuffle.errors import InputEmptyError, InputFormatError
from variant_shuffle.logging_utils import (
    RunSummary,
    add_logging_args,
    configure_logging,
    resolve_log_level,
)
from variant_shuffle.m3u_exporter import M3UExporter
from variant_shuffle.report_writer import log_distribution_table, write_distribution_report
from variant_shuffle.shuffle.options import ShuffleOptions
from variant_shuffle.shuffle.pipeline import PipelineResult, run_pipeline
from variant_shuffle.titles.grouping import SimilarityGrouper
from variant_shuffle.titles.part_classifier import PartClassifier
from variant_shuffle.titles.resolver import SongTitleResolver
from variant_shuffle.track_loader import load_tracks

logger = logging.getLogger("variant_shuffle.main")


class ShuffleApp:
    """Main application orchestrator"""

    def __init__(self, config: Config):
        self.config = config
        classifier = PartClassifier.with_extras(
            config.extra_song_openers,
            config.extra_non_song_openers,
        )
        self.grouper = SimilarityGrouper(
            SongTitleResolver(classifier),
            report_examples=config.report_examples,
        )
        self.exporter = M3UExporter()

    def build_options(self, args: argparse.Namespace) -> ShuffleOptions:
        """CLI flags win over config values; pass-through ignores config shuffle settings."""
        passthrough = bool(args.passthrough)
        if passthrough:
            return ShuffleOptions(
                min_distance=args.min_distance,
                target_count=args.count,
                seed=args.seed,
                passthrough=True,
                distribution_report=args.distribution_report,
                log_distribution=not args.no_distribution_log,
            )
        return ShuffleOptions(
            min_distance=args.min_distance if args.min_distance is not None else self.config.min_distance,
            target_count=args.count if args.count is not None else self.config.target_count,
            seed=args.seed if args.seed is not None else self.config.seed,
            distribution_report=args.distribution_report,
            log_distribution=not args.no_distribution_log,
            max_attempts=self.config.max_attempts,
        )

    def run(self, input_path: str, output_path: str, options: ShuffleOptions) -> PipelineResult:
        """
        Load, shuffle, and write. Options are validated before the input is read
        so that nothing is written for an invalid invocation.
        """
        options.validate()
        summary = RunSummary("Shuffle", logger)
        tracks = load_tracks(input_path)
        result = run_pipeline(tracks, options, grouper=self.grouper)

        self.exporter.write(output_path, result.tracks)
        summary.increment("files_written")

        if not options.passthrough:
            if options.distribution_report:
                write_distribution_report(options.distribution_report, result.distribution)
                summary.increment("files_written")
            if options.log_distribution:
                log_distribution_table(result.distribution)

        self._log_summary(summary, tracks, result)
        return result

    def _log_summary(self, summary: RunSummary, tracks, result: PipelineResult) -> None:
        summary.add("tracks_in", len(tracks))
        summary.add("tracks_out", len(result.tracks))
        if result.grouping is not None:
            stats = result.grouping.get_stats()
            summary.add("distinct_titles", stats["distinct_titles"])
            summary.add("songs_with_versions", stats["variant_groups"])
            summary.add("relaxed_placements", len(result.relaxed_slots))
            summary.add("quality", result.audit.summary())
        summary.log()


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Shuffle a track list so versions of the same song (covers, remixes, live takes) are spread apart",
    )
    parser.add_argument("input", help="Track list: CSV with a path (and optional weight) column, or an M3U playlist")
    parser.add_argument("output", help="M3U playlist to write")
    parser.add_argument(
        "--count", "-n",
        type=int,
        help="Number of tracks in the output (default: input length; larger values repeat tracks)",
    )
    parser.add_argument(
        "--min-distance", "-d",
        type=int,
        help="Minimum number of slots between versions of the same song (default: 5)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible order")
    parser.add_argument(
        "--passthrough",
        action="store_true",
        help="Keep the input order (optionally truncated with --count); no shuffling",
    )
    parser.add_argument(
        "--distribution-report",
        metavar="CSV",
        help="Write per-track placement statistics to this CSV file",
    )
    parser.add_argument(
        "--no-distribution-log",
        action="store_true",
        help="Do not log the distribution table (requires --distribution-report)",
    )
    parser.add_argument("--config", metavar="YAML", help="Optional YAML configuration file")
    add_logging_args(parser)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Entry point"""
    args = parse_arguments(argv)

    try:
        config = Config(args.config)
    except (FileNotFoundError, ValueError) as e:
        configure_logging(level=resolve_log_level(args), log_file=args.log_file)
        logger.error(f"Configuration error: {e}")
        return 1

    level = resolve_log_level(args)
    if level == 'INFO':
        level = config.log_level
    configure_logging(level=level, log_file=args.log_file or config.log_file)

    try:
        app = ShuffleApp(config)
        options = app.build_options(args)
        app.run(args.input, args.output, options)
    except (FileNotFoundError, InputEmptyError, InputFormatError) as e:
        logger.error(f"Input error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
