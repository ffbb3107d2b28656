"""Data classes for duplicate detection results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from bsl_tracker.records import ExistingRecord


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class DuplicateMatch:
    """An existing record that likely duplicates the candidate.

    Attributes:
        record: The existing record, by reference.
        similarity: Composite score in ``[0, 1]``.
        reasons: Human-readable justifications in evaluation order
            (location, breed overlap, legislation type).
    """

    record: ExistingRecord
    similarity: float
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record": self.record.model_dump(mode="json"),
            "similarity": self.similarity,
            "reasons": list(self.reasons),
        }


@dataclass
class DuplicateDetectionResult:
    """Outcome of checking one candidate against the record pool.

    ``confidence`` describes the top match; it is ``LOW`` and carries no
    signal when there are no matches.
    """

    matches: List[DuplicateMatch] = field(default_factory=list)
    confidence: Confidence = Confidence.LOW

    @property
    def has_duplicates(self) -> bool:
        return bool(self.matches)

    @property
    def top_match(self) -> Optional[DuplicateMatch]:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_duplicates": self.has_duplicates,
            "confidence": self.confidence.value,
            "matches": [m.to_dict() for m in self.matches],
        }
