"""
Title resolution: filename heuristics that map each track to a song key.
"""
from .grouping import GroupingResult, SimilarityGrouper
from .normalizer import normalize_title
from .part_classifier import PartClassifier
from .path_context import PathContext, extract_path_context
from .resolver import (
    SongTitleResolver,
    choose_winner_from_two_parts,
    run_tournament,
)

__all__ = [
    "GroupingResult",
    "SimilarityGrouper",
    "normalize_title",
    "PartClassifier",
    "PathContext",
    "extract_path_context",
    "SongTitleResolver",
    "choose_winner_from_two_parts",
    "run_tournament",
]
