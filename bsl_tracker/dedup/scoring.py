"""Per-record duplicate scoring.

Three independent signals contribute to a weighted composite:

  * location: exact municipality/state/type, or a close name within
    the same state and municipality type
  * breed overlap: Jaccard overlap of the canonical breed sets
  * legislation type: identical ban/restriction classification
"""

from __future__ import annotations

import math
from typing import List, Optional

from bsl_tracker.dedup.breeds import breed_overlap
from bsl_tracker.dedup.result import DuplicateMatch
from bsl_tracker.dedup.similarity import (
    normalize_municipality_name,
    normalize_state,
    same_municipality,
    string_similarity,
)
from bsl_tracker.dedup.synonyms import BreedSynonymTable
from bsl_tracker.dedup.thresholds import DedupThresholds, resolve_thresholds
from bsl_tracker.records import CandidateRecord, ExistingRecord

# Scores are rounded so threshold comparisons are not decided by float noise
SCORE_PRECISION = 6


def format_percent(value: float) -> int:
    """Round a ratio to a whole percentage, halves rounding up."""
    return int(math.floor(value * 100 + 0.5))


def score_match(
    candidate: CandidateRecord,
    existing: ExistingRecord,
    thresholds: Optional[DedupThresholds] = None,
    synonyms: Optional[BreedSynonymTable] = None,
) -> Optional[DuplicateMatch]:
    """Score *existing* against *candidate*.

    Returns a ``DuplicateMatch`` when the composite score exceeds the match
    threshold and at least one signal produced a reason, otherwise ``None``.
    """
    t = resolve_thresholds(thresholds)
    reasons: List[str] = []
    total = 0.0

    # 1. Location
    state_match = normalize_state(candidate.state) == normalize_state(existing.state)
    type_match = candidate.municipality_type == existing.municipality_type

    if state_match and type_match and same_municipality(candidate.municipality, existing.municipality):
        total += t.location_weight
        reasons.append("Exact location match")
    elif state_match and type_match:
        name_sim = string_similarity(
            normalize_municipality_name(candidate.municipality),
            normalize_municipality_name(existing.municipality),
        )
        if name_sim > t.name_similarity_threshold:
            total += t.location_weight * name_sim
            reasons.append(f"Similar municipality name ({format_percent(name_sim)}% match)")

    # 2. Breed overlap
    overlap = breed_overlap(candidate.banned_breeds, existing.banned_breeds, synonyms)
    if overlap > t.breed_overlap_threshold:
        total += t.breed_weight * overlap
        reasons.append(f"{format_percent(overlap)}% breed overlap")

    # 3. Legislation type
    if candidate.legislation_type == existing.legislation_type:
        total += t.legislation_weight
        reasons.append("Same legislation type")

    similarity = round(total / t.weight_sum, SCORE_PRECISION)

    if similarity > t.match_threshold and reasons:
        return DuplicateMatch(record=existing, similarity=similarity, reasons=reasons)
    return None
