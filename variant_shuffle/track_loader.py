"""
Track list loading from CSV tables or M3U playlists.

CSV requirements:
    - Must have headers.
    - Acceptable column names for path: path, file_path, file, filename, location
    - Acceptable column names for weight (optional): weight, weights, count, plays
    - Extra columns are kept on Track.original_row.
"""
import csv
import logging
from pathlib import Path
from typing import List, Optional

from variant_shuffle.m3u_exporter import read_playlist_paths
from variant_shuffle.errors import InputFormatError
from variant_shuffle.tracks import Track

logger = logging.getLogger(__name__)

PATH_COLUMNS = ("path", "file_path", "file", "filename", "location")
WEIGHT_COLUMNS = ("weight", "weights", "count", "plays")
PLAYLIST_SUFFIXES = {".m3u", ".m3u8"}


def _find_column(fieldnames: List[str], candidates) -> Optional[str]:
    by_lower = {name.strip().lower(): name for name in fieldnames if name}
    return next((by_lower[c] for c in candidates if c in by_lower), None)


def load_csv_tracks(path: Path) -> List[Track]:
    """Load tracks from a CSV file; rows with a blank path are dropped."""
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = reader.fieldnames or []
        path_col = _find_column(fieldnames, PATH_COLUMNS)
        weight_col = _find_column(fieldnames, WEIGHT_COLUMNS)
        if not path_col:
            raise InputFormatError(
                f"CSV must have a path column (one of: {', '.join(PATH_COLUMNS)}): {path}"
            )

        tracks: List[Track] = []
        skipped = 0
        for row in reader:
            file_path = (row.get(path_col) or "").strip()
            if not file_path:
                skipped += 1
                continue
            weight = row.get(weight_col) if weight_col else None
            tracks.append(Track.from_raw(file_path, weight, original_row=row))

    if skipped:
        logger.debug("Dropped %d rows with a blank path from %s", skipped, path.name)
    return tracks


def load_playlist_tracks(path: Path) -> List[Track]:
    return [Track.from_raw(p, original_row=p) for p in read_playlist_paths(path)]


def load_tracks(path) -> List[Track]:
    """
    Load tracks from `path`, choosing the reader by file extension.

    Raises:
        FileNotFoundError: if the file does not exist
        InputFormatError: if a CSV has no recognizable path column
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix.lower() in PLAYLIST_SUFFIXES:
        tracks = load_playlist_tracks(path)
    else:
        tracks = load_csv_tracks(path)
    logger.info("Loaded %d tracks from %s", len(tracks), path)
    return tracks
