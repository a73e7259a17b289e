"""
Options accepted by the shuffle pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from variant_shuffle.errors import InvalidConfigurationError
from variant_shuffle.shuffle.shuffler import DEFAULT_MIN_DISTANCE, MAX_FAILED_ATTEMPTS


@dataclass(frozen=True)
class ShuffleOptions:
    """
    Attributes:
        min_distance: Minimum slots between tracks of the same song (None = 5)
        target_count: Output length (None = input length)
        seed: Seed for the random source; fixed seed -> identical output
        passthrough: Keep input order, optionally truncated to target_count
        distribution_report: Destination for the per-track distribution CSV
        log_distribution: Also log the distribution table; turning it off
            requires a distribution_report destination
        max_attempts: Consecutive rejected draws before the distance rule is relaxed
    """
    min_distance: Optional[int] = None
    target_count: Optional[int] = None
    seed: Optional[int] = None
    passthrough: bool = False
    distribution_report: Optional[str] = None
    log_distribution: bool = True
    max_attempts: int = MAX_FAILED_ATTEMPTS

    @property
    def effective_min_distance(self) -> int:
        return DEFAULT_MIN_DISTANCE if self.min_distance is None else self.min_distance

    @property
    def wants_distribution(self) -> bool:
        return bool(self.distribution_report) or self.log_distribution

    def validate(self) -> "ShuffleOptions":
        """
        Reject contradictory or out-of-range options.

        Raises:
            InvalidConfigurationError
        """
        if self.passthrough:
            conflicts = []
            if self.min_distance is not None:
                conflicts.append("min distance")
            if self.seed is not None:
                conflicts.append("seed")
            if self.distribution_report:
                conflicts.append("distribution report")
            if conflicts:
                raise InvalidConfigurationError(
                    f"Pass-through mode cannot be combined with: {', '.join(conflicts)}"
                )
        if not self.log_distribution and not self.distribution_report:
            raise InvalidConfigurationError(
                "Suppressing the distribution log requires a distribution report destination"
            )
        if self.min_distance is not None and self.min_distance < 0:
            raise InvalidConfigurationError(f"Minimum distance must be >= 0, got {self.min_distance}")
        if self.target_count is not None and self.target_count <= 0:
            raise InvalidConfigurationError(f"Target count must be >= 1, got {self.target_count}")
        if self.max_attempts < 0:
            raise InvalidConfigurationError(f"Max attempts must be >= 0, got {self.max_attempts}")
        return self
