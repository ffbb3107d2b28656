"""Duplicate submission detection for crowd-submitted legislation records.

A candidate is scored against each existing record on location, breed
overlap and legislation type; likely duplicates are ranked and summarized
with a confidence tier.
"""

from bsl_tracker.dedup.result import Confidence, DuplicateDetectionResult, DuplicateMatch
from bsl_tracker.dedup.detector import DuplicateDetector, classify_confidence, detect_duplicates
from bsl_tracker.dedup.thresholds import DedupThresholds

__all__ = [
    "Confidence",
    "DedupThresholds",
    "DuplicateDetectionResult",
    "DuplicateDetector",
    "DuplicateMatch",
    "classify_confidence",
    "detect_duplicates",
]
