"""Weights and thresholds used by the duplicate scorer.

The values were chosen empirically on the submission queue.  They are exposed
as module constants and bundled into ``DedupThresholds`` so callers and tests
can override them per call instead of patching module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bsl_tracker.config import Config

LOCATION_WEIGHT = 0.40
BREED_WEIGHT = 0.35
LEGISLATION_WEIGHT = 0.25

MATCH_THRESHOLD = 0.6
NAME_SIMILARITY_THRESHOLD = 0.8
BREED_OVERLAP_THRESHOLD = 0.5

HIGH_CONFIDENCE_THRESHOLD = 0.9
MEDIUM_CONFIDENCE_THRESHOLD = 0.75

MAX_MATCHES = 3


@dataclass(frozen=True)
class DedupThresholds:
    """Immutable bundle of scoring weights and cut-offs.

    Every comparison against these values is strict (``>``).
    """

    location_weight: float = LOCATION_WEIGHT
    breed_weight: float = BREED_WEIGHT
    legislation_weight: float = LEGISLATION_WEIGHT

    match_threshold: float = MATCH_THRESHOLD
    name_similarity_threshold: float = NAME_SIMILARITY_THRESHOLD
    breed_overlap_threshold: float = BREED_OVERLAP_THRESHOLD

    high_confidence: float = HIGH_CONFIDENCE_THRESHOLD
    medium_confidence: float = MEDIUM_CONFIDENCE_THRESHOLD

    max_matches: int = MAX_MATCHES

    def __post_init__(self) -> None:
        weights = (self.location_weight, self.breed_weight, self.legislation_weight)
        if any(w < 0 for w in weights):
            raise ValueError("Signal weights must be non-negative")
        if sum(weights) <= 0:
            raise ValueError("At least one signal weight must be positive")
        if self.max_matches < 1:
            raise ValueError("max_matches must be at least 1")

    @property
    def weight_sum(self) -> float:
        return self.location_weight + self.breed_weight + self.legislation_weight

    @classmethod
    def from_config(cls, config: "Config") -> "DedupThresholds":
        """Build thresholds from the settings singleton (or any ``Config``)."""
        return cls(
            location_weight=config.dedup_location_weight,
            breed_weight=config.dedup_breed_weight,
            legislation_weight=config.dedup_legislation_weight,
            match_threshold=config.dedup_match_threshold,
            name_similarity_threshold=config.dedup_name_similarity_threshold,
            breed_overlap_threshold=config.dedup_breed_overlap_threshold,
            high_confidence=config.dedup_high_confidence,
            medium_confidence=config.dedup_medium_confidence,
            max_matches=config.dedup_max_matches,
        )


DEFAULT_THRESHOLDS = DedupThresholds()


def resolve_thresholds(thresholds: "DedupThresholds | None" = None) -> DedupThresholds:
    """Return *thresholds*, or the configured values when *None*."""
    if thresholds is not None:
        return thresholds
    from bsl_tracker.config import get_config

    return DedupThresholds.from_config(get_config())
