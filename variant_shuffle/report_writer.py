"""
Distribution report output: a CSV file and a log-friendly table.

The first CSV column is headed NormalizedTitle for compatibility with
existing report consumers, but it holds the track path.
"""
import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from variant_shuffle.shuffle.distribution import TrackDistribution

logger = logging.getLogger(__name__)

REPORT_HEADER = [
    "NormalizedTitle",
    "Count",
    "Expected",
    "Distribution",
    "FirstDelta",
    "LastDelta",
    "AverageDelta",
    "Indexes",
]


def _blank_if_none(value, fmt: str = "{}") -> str:
    return "" if value is None else fmt.format(value)


def distribution_row(row: TrackDistribution) -> List[str]:
    return [
        row.path,
        str(row.count),
        f"{row.expected:.6f}",
        f"{row.observed:.6f}",
        _blank_if_none(row.first_delta),
        _blank_if_none(row.last_delta),
        _blank_if_none(row.average_delta, "{:.2f}"),
        " ".join(str(i) for i in row.indexes),
    ]


def write_distribution_report(output_path: Union[str, Path], rows: Iterable[TrackDistribution]) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_HEADER)
        for row in rows:
            writer.writerow(distribution_row(row))
            count += 1
    logger.info("Wrote distribution report for %d tracks: %s", count, output_path)
    return output_path


def format_distribution_table(rows: Sequence[TrackDistribution], max_rows: Optional[int] = None) -> List[str]:
    """Fixed-width lines, most-placed tracks first."""
    ordered = sorted(rows, key=lambda r: r.count, reverse=True)
    if max_rows is not None:
        ordered = ordered[:max_rows]
    lines = [f"{'Count':>5} {'Expected':>8} {'Observed':>8} {'First':>5} {'Last':>5} {'AvgGap':>7}  Path"]
    for row in ordered:
        lines.append(
            f"{row.count:>5} {row.expected:>8.2%} {row.observed:>8.2%} "
            f"{_blank_if_none(row.first_delta):>5} {_blank_if_none(row.last_delta):>5} "
            f"{_blank_if_none(row.average_delta, '{:.1f}'):>7}  {row.path}"
        )
    return lines


def log_distribution_table(rows: Sequence[TrackDistribution], max_rows: Optional[int] = None) -> None:
    for line in format_distribution_table(rows, max_rows=max_rows):
        logger.info(line)
