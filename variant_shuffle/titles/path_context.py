"""
Directory-derived keywords used to discard artist/album fragments of a filename.
"""
import re
from dataclasses import dataclass
from typing import Tuple

_SEPARATORS = re.compile(r"[\\/]+")
_DRIVE = re.compile(r"^[A-Za-z]:$")


@dataclass(frozen=True)
class PathContext:
    keywords: Tuple[str, ...] = ()

    def overlaps(self, text: str) -> bool:
        """True if text and any keyword contain one another (case-insensitive)."""
        needle = text.strip().lower()
        if not needle:
            return False
        return any(needle in kw or kw in needle for kw in self.keywords)


def extract_path_context(path: str, depth: int = 2) -> PathContext:
    """
    Build keywords from the innermost `depth` directory segments of a path.

    Keywords are lowercased and ordered innermost first. A bare filename
    yields an empty context.
    """
    segments = [s for s in _SEPARATORS.split(path or "") if s]
    directories = segments[:-1]
    keywords = []
    for segment in reversed(directories):
        if len(keywords) >= depth:
            break
        keyword = segment.strip().lower()
        if not keyword or keyword in (".", "..") or _DRIVE.match(keyword):
            continue
        keywords.append(keyword)
    return PathContext(keywords=tuple(keywords))
