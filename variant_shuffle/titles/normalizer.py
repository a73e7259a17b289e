"""
Title Normalization
===================
Turns one filename fragment into the canonical key used to group variants
of the same song (covers, remixes, live takes).

Rules run in a fixed order; each operates on the output of the previous one:

1. cut everything from a " by " / " ft" / " feat" credit marker to the end
2. drop "(...)" and "[...]" annotations
3. drop a leading track number ("03 - ", " 7.", "(12) ", "07 "); a bare
   "12 " followed by a word is kept as part of the title
4. drop a leading lone "."
5. fold runs of "_", "-", ":" into a space and collapse whitespace
6. lowercase

The result may be empty (a fragment that was only a track number).
"""
import re

_CREDIT_MARKER = re.compile(r"\s(?:by|ft|feat(?:uring)?)\b.*$", re.IGNORECASE | re.DOTALL)
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_BRACKETED = re.compile(r"\[[^\]]*\]")
_LEADING_TRACK_NUMBER = re.compile(r"^\s*(?:\d+\s*[-._)]|0\d\s)\s*")
_LEADING_PAREN_NUMBER = re.compile(r"^\s*\(\d+\)\s*")
_LEADING_DOT = re.compile(r"^\s*\.\s+")
_CONNECTORS = re.compile(r"[_\-:]+")
_WHITESPACE = re.compile(r"\s+")


def strip_credits(text: str) -> str:
    return _CREDIT_MARKER.sub("", text)


def strip_annotations(text: str) -> str:
    text = _PARENTHETICAL.sub("", text)
    return _BRACKETED.sub("", text)


def normalize_title(text: str) -> str:
    """
    Canonical lowercase key for a title fragment.

    Args:
        text: One dash-delimited part of a filename

    Returns:
        Normalized key, possibly empty
    """
    if not text:
        return ""

    key = strip_credits(text)
    key = strip_annotations(key)
    key = _LEADING_PAREN_NUMBER.sub("", key)
    key = _LEADING_TRACK_NUMBER.sub("", key)
    key = _LEADING_DOT.sub("", key)
    key = _CONNECTORS.sub(" ", key)
    key = _WHITESPACE.sub(" ", key).strip()
    return key.lower()
