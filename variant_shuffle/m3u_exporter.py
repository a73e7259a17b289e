"""
M3U Playlist Exporter - Writes shuffled track lists as extended M3U playlists
"""
import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

M3U_HEADER = "#EXTM3U"


def _entry_path(track) -> str:
    return track if isinstance(track, str) else track.path


class M3UExporter:
    """Exports ordered track lists to M3U format"""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def render(self, tracks: Iterable) -> str:
        lines = [M3U_HEADER]
        lines.extend(_entry_path(t) for t in tracks)
        return "\n".join(lines) + "\n"

    def write(self, output_path: Union[str, Path], tracks: Iterable) -> Path:
        """
        Write a playlist.

        Args:
            output_path: Destination file; parent directories are created
            tracks: Track-like objects with a `.path`, or plain path strings

        Returns:
            Path of the written file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tracks = list(tracks)
        with open(output_path, "w", encoding=self.encoding, newline="\n") as f:
            f.write(self.render(tracks))
        logger.info(f"Exported {len(tracks)} tracks to: {output_path}")
        return output_path


def read_playlist_paths(playlist_path: Union[str, Path]) -> List[str]:
    """Entries of an M3U file; comment (#) and blank lines are skipped."""
    playlist_path = Path(playlist_path)
    if not playlist_path.is_file():
        raise FileNotFoundError(f"M3U file not found: {playlist_path}")

    paths = []
    with open(playlist_path, "r", encoding="utf-8-sig") as f:
        for line in f:
            entry = line.replace("\r", "").strip()
            if not entry or entry.startswith("#"):
                continue
            paths.append(entry)
    return paths
