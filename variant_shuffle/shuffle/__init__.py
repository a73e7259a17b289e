from .audit import AuditReport, Violation, audit_shuffle
from .distribution import TrackDistribution, compute_distribution
from .options import ShuffleOptions
from .pipeline import PipelineResult, run_pipeline
from .shuffler import ConstrainedShuffler, ShuffleResult
from .weighted_index import WeightedIndex, build_boundaries, lookup

__all__ = [
    "AuditReport",
    "Violation",
    "audit_shuffle",
    "TrackDistribution",
    "compute_distribution",
    "ShuffleOptions",
    "PipelineResult",
    "run_pipeline",
    "ConstrainedShuffler",
    "ShuffleResult",
    "WeightedIndex",
    "build_boundaries",
    "lookup",
]
