"""
Song Title Resolution
=====================
Picks the fragment of a filename that names the song, then normalizes it.

Filenames are split on " - " into parts. Parts that are numbers, disc
references, too short, or that repeat the enclosing directory names are
discarded. Among the rest, the winner is chosen by:

1. a fragment whose normalized form is already a known title (largest known
   group wins, first in part order on ties)
2. otherwise a pairwise comparison (two parts) or a left-to-right
   single-elimination tournament (three or more parts)

With no usable candidate the last raw part is used.
"""
import logging
import re
from typing import Collection, List, Mapping, Optional, Sequence

from .normalizer import normalize_title
from .part_classifier import DEFAULT_CLASSIFIER, PartClassifier
from .path_context import extract_path_context

logger = logging.getLogger(__name__)

PART_SEPARATOR = " - "
MIN_PART_LENGTH = 2

_PATH_SEPARATORS = re.compile(r"[\\/]")
_EXTENSION = re.compile(r"\.[A-Za-z0-9]{1,5}$")
# "01 - ", "1-05 ", "07. ", "12_", "07 "; a bare "12 " or "2000 " opens the title
_TRACK_PREFIX = re.compile(r"^\s*(?:\d{1,2}[-.])?(?:\d{1,3}\s*[-._]\s*|0\d\s+)(?=\S)")
_PAREN_NUMBER_PREFIX = re.compile(r"^\s*\(\d+\)\s*")
_LEADING_DIGIT_TOKEN = re.compile(r"^(?:\d+\s*[-._]\s*|0\d\s+)(?=\S)")
_DOUBLE_SPACE = re.compile(r"\s{2,}")
_ONLY_DIGITS = re.compile(r"^\d+$")
_DISC_REFERENCE = re.compile(r"^(?:disc|disk|cd)\s*\d+$", re.IGNORECASE)


def filename_stem(path: str) -> str:
    """Filename without directories or extension; handles both separator styles."""
    name = _PATH_SEPARATORS.split(path or "")[-1]
    return _EXTENSION.sub("", name)


def clean_stem(stem: str) -> str:
    """Strip track/disc number prefixes and a leading "(N)"; blank pure numbers."""
    text = _PAREN_NUMBER_PREFIX.sub("", stem)
    text = _TRACK_PREFIX.sub("", text)
    text = _DOUBLE_SPACE.sub(" ", text).strip()
    if _ONLY_DIGITS.match(text):
        return ""
    return text


def choose_winner_from_two_parts(a: str, b: str, classifier: PartClassifier = DEFAULT_CLASSIFIER) -> str:
    """
    Pick the likelier song title of two fragments.

    Song-like openers win first, then the longer fragment unless it starts
    with a performer's name, then whichever is not a performer's name.
    The right-hand part wins otherwise.
    """
    a_song = classifier.is_song_like(a)
    b_song = classifier.is_song_like(b)
    a_name = classifier.looks_like_non_song_opener(a)
    b_name = classifier.looks_like_non_song_opener(b)

    if a_song:
        return a
    if b_song:
        return b
    if len(a) > len(b) and not classifier.looks_like_song_opener(b) and not a_name:
        return a
    if len(b) > len(a) and not classifier.looks_like_song_opener(a) and not b_name:
        return b
    if a_name and not b_name:
        return b
    if b_name and not a_name:
        return a
    return b


def run_tournament(parts: Sequence[str], classifier: PartClassifier = DEFAULT_CLASSIFIER) -> str:
    """
    Reduce parts to one winner by power-of-two strides.

    Round with stride s compares slot i against slot i+s (i = 0, 2s, 4s, ...)
    and stores the winner in slot i. A slot with no partner advances unchanged.
    """
    slots = list(parts)
    stride = 1
    while stride < len(slots):
        for i in range(0, len(slots) - stride, stride * 2):
            slots[i] = choose_winner_from_two_parts(slots[i], slots[i + stride], classifier)
        stride *= 2
    return slots[0]


class SongTitleResolver:
    """Resolves a raw track path to its canonical song key."""

    def __init__(self, classifier: Optional[PartClassifier] = None):
        self.classifier = classifier or DEFAULT_CLASSIFIER

    def split_parts(self, path: str) -> List[str]:
        return clean_stem(filename_stem(path)).split(PART_SEPARATOR)

    def candidate_parts(self, path: str, parts: Sequence[str]) -> List[str]:
        """Drop empty, numeric, short, disc and directory-name parts."""
        context = extract_path_context(path)
        candidates = []
        for raw in parts:
            part = raw.strip()
            if not part or _ONLY_DIGITS.match(part) or len(part) < MIN_PART_LENGTH:
                continue
            if _DISC_REFERENCE.match(part):
                continue
            if not self.classifier.is_song_like(part) and context.overlaps(part):
                continue
            candidates.append(part)
        return candidates

    def _claim_known_title(
        self,
        candidates: Sequence[str],
        known_titles: Mapping[str, Collection],
    ) -> Optional[str]:
        best = None
        best_size = 0
        for part in candidates:
            key = normalize_title(part)
            if not key or key not in known_titles:
                continue
            size = len(known_titles[key])
            if best is None or size > best_size:
                best, best_size = part, size
        return best

    def choose_part(self, path: str, known_titles: Optional[Mapping[str, Collection]] = None) -> str:
        """Return the raw fragment of the filename that names the song."""
        parts = self.split_parts(path)
        if len(parts) == 1:
            return _LEADING_DIGIT_TOKEN.sub("", parts[0].strip())

        candidates = self.candidate_parts(path, parts)
        if not candidates:
            return parts[-1].strip()
        if len(candidates) == 1:
            return candidates[0]

        if known_titles:
            claimed = self._claim_known_title(candidates, known_titles)
            if claimed is not None:
                return claimed

        if len(candidates) == 2:
            return choose_winner_from_two_parts(candidates[0], candidates[1], self.classifier)
        return run_tournament(candidates, self.classifier)

    def resolve(self, path: str, known_titles: Optional[Mapping[str, Collection]] = None) -> str:
        """
        Canonical song key for a path.

        Args:
            path: Raw track path or filename
            known_titles: Canonical key -> tracks already assigned that key;
                only used to let an established title claim its fragment

        Returns:
            Lowercase canonical key (may be empty)
        """
        chosen = self.choose_part(path, known_titles)
        key = normalize_title(chosen)
        logger.debug("Resolved %r -> part %r -> %r", path, chosen, key)
        return key
