"""
Opening-word heuristics that bias title selection among filename fragments.

A fragment that starts like a song title ("The ...", "I ...", "Jingle ...")
is preferred; a fragment that starts with a well-known performer's first name
is treated as an artist, never a title.
"""
import re
from typing import FrozenSet, Iterable, Optional

SONG_OPENERS: FrozenSet[str] = frozenset({
    # articles
    "the", "a", "an",
    # pronouns and common lyric starts
    "i", "i'm", "i'll", "i've", "i'd", "me", "my", "you", "you're", "your",
    "we", "we're", "our", "it", "it's", "he", "she", "they", "this", "that",
    "all", "what", "when", "where", "who", "why", "how", "let", "let's",
    "don't", "do", "have", "there", "here", "oh", "o",
    # seasonal / holiday
    "christmas", "xmas", "santa", "jingle", "winter", "white", "silent",
    "holy", "deck", "joy", "feliz", "frosty", "rudolph", "sleigh", "snow",
    "merry", "happy", "holly", "mistletoe", "little", "last", "blue",
    "rockin'", "rocking", "baby", "hark", "noel", "away", "angels",
    "carol", "silver", "auld",
})

NON_SONG_OPENERS: FrozenSet[str] = frozenset({
    "andy", "bing", "bobby", "brenda", "bruce", "bryan", "burl", "chuck",
    "darlene", "david", "dean", "dolly", "eartha", "ella", "elton", "elvis",
    "frank", "frankie", "gene", "george", "gwen", "john", "johnny", "jose",
    "josh", "judy", "justin", "kelly", "kenny", "louis", "mariah", "michael",
    "nat", "paul", "perry", "stevie", "taylor", "tony", "willie",
})


def _opener_pattern(words: Iterable[str]) -> re.Pattern:
    alternation = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"^(?:{alternation})(?![\w'])", re.IGNORECASE)


class PartClassifier:
    """
    Prefix matcher over two closed word lists.

    Matching is on whole leading words of the stripped, lowercased text, so
    "The Christmas Song" opens with "the" but "Theodore" does not.
    """

    def __init__(
        self,
        song_openers: Optional[Iterable[str]] = None,
        non_song_openers: Optional[Iterable[str]] = None,
    ):
        self.song_openers = frozenset(
            w.lower() for w in (SONG_OPENERS if song_openers is None else song_openers)
        )
        self.non_song_openers = frozenset(
            w.lower() for w in (NON_SONG_OPENERS if non_song_openers is None else non_song_openers)
        )
        self._song_re = _opener_pattern(self.song_openers) if self.song_openers else None
        self._non_song_re = _opener_pattern(self.non_song_openers) if self.non_song_openers else None

    @classmethod
    def with_extras(cls, extra_song_openers=None, extra_non_song_openers=None) -> "PartClassifier":
        return cls(
            song_openers=SONG_OPENERS | frozenset(extra_song_openers or ()),
            non_song_openers=NON_SONG_OPENERS | frozenset(extra_non_song_openers or ()),
        )

    def looks_like_song_opener(self, text: str) -> bool:
        if not text or self._song_re is None:
            return False
        return bool(self._song_re.match(text.strip().lower()))

    def looks_like_non_song_opener(self, text: str) -> bool:
        if not text or self._non_song_re is None:
            return False
        return bool(self._non_song_re.match(text.strip().lower()))

    def is_song_like(self, text: str) -> bool:
        """Song opener that is not also a listed performer name."""
        return self.looks_like_song_opener(text) and not self.looks_like_non_song_opener(text)


DEFAULT_CLASSIFIER = PartClassifier()
