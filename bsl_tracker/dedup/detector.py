"""Orchestrator for duplicate submission detection.

Every existing record is scored independently against the candidate; the
surviving matches are ranked, capped and summarized with a confidence tier.
Detection is synchronous and side-effect free apart from debug logging, so
callers may discard a stale result at any time.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from bsl_tracker.dedup.result import Confidence, DuplicateDetectionResult, DuplicateMatch
from bsl_tracker.dedup.scoring import score_match
from bsl_tracker.dedup.synonyms import BreedSynonymTable, get_breed_synonyms
from bsl_tracker.dedup.thresholds import DedupThresholds, resolve_thresholds
from bsl_tracker.errors import InvalidCandidateError, InvalidRecordError
from bsl_tracker.records import CandidateRecord, ExistingRecord
from bsl_tracker.utils.logger import log_debug

CandidateInput = Union[CandidateRecord, Mapping[str, Any]]
RecordInput = Union[ExistingRecord, Mapping[str, Any]]


def as_candidate(value: CandidateInput) -> CandidateRecord:
    """Validate *value* as a candidate, raising ``InvalidCandidateError``."""
    if isinstance(value, CandidateRecord):
        return value
    if not isinstance(value, Mapping):
        raise InvalidCandidateError(f"Unsupported candidate type: {type(value).__name__}")
    try:
        return CandidateRecord.model_validate(value)
    except ValidationError as exc:
        raise InvalidCandidateError(f"Invalid candidate submission: {exc}") from exc


def as_existing_record(value: RecordInput, index: Optional[int] = None) -> ExistingRecord:
    """Validate *value* as an existing record, raising ``InvalidRecordError``."""
    if isinstance(value, ExistingRecord):
        return value
    if not isinstance(value, Mapping):
        raise InvalidRecordError(f"Unsupported record type: {type(value).__name__}", index=index)
    try:
        return ExistingRecord.model_validate(value)
    except ValidationError as exc:
        raise InvalidRecordError(f"Invalid legislation record at index {index}: {exc}", index=index) from exc


def classify_confidence(similarity: float, thresholds: Optional[DedupThresholds] = None) -> Confidence:
    """Map the top match score onto a confidence tier."""
    t = resolve_thresholds(thresholds)
    if similarity > t.high_confidence:
        return Confidence.HIGH
    if similarity > t.medium_confidence:
        return Confidence.MEDIUM
    return Confidence.LOW


class DuplicateDetector:
    """Detect likely duplicates of a submission in the legislation table.

    Args:
        thresholds: Weights and cut-offs.  Defaults to the configured values.
        synonyms: Breed synonym table.  Defaults to the configured YAML file.

    Usage::

        detector = DuplicateDetector()
        result = detector.check(candidate, records)
        if result.has_duplicates:
            # warn the submitter before creating a new record
            ...
    """

    def __init__(
        self,
        thresholds: Optional[DedupThresholds] = None,
        synonyms: Optional[BreedSynonymTable] = None,
    ):
        self.thresholds = resolve_thresholds(thresholds)
        self.synonyms = get_breed_synonyms(synonyms)

    def check(self, candidate: CandidateInput, existing: Iterable[RecordInput]) -> DuplicateDetectionResult:
        """Score *candidate* against every record in *existing*.

        Returns:
            ``DuplicateDetectionResult`` with at most ``max_matches`` matches,
            best first.  Ties keep the order of *existing*.
        """
        cand = as_candidate(candidate)
        records = [as_existing_record(r, i) for i, r in enumerate(existing)]

        log_debug(
            "Starting duplicate detection",
            municipality=cand.municipality,
            state=cand.state,
            record_count=len(records),
        )

        matches: List[DuplicateMatch] = []
        for record in records:
            match = score_match(cand, record, self.thresholds, self.synonyms)
            if match is not None:
                matches.append(match)

        # sorted() is stable, so equal scores keep input order
        matches = sorted(matches, key=lambda m: m.similarity, reverse=True)
        matches = matches[: self.thresholds.max_matches]

        confidence = Confidence.LOW
        if matches:
            confidence = classify_confidence(matches[0].similarity, self.thresholds)

        log_debug(
            "Duplicate detection finished",
            match_count=len(matches),
            confidence=confidence.value,
        )
        return DuplicateDetectionResult(matches=matches, confidence=confidence)


def detect_duplicates(
    candidate: CandidateInput,
    existing: Iterable[RecordInput],
    thresholds: Optional[DedupThresholds] = None,
    synonyms: Optional[BreedSynonymTable] = None,
) -> DuplicateDetectionResult:
    """Functional entry point; see ``DuplicateDetector.check``."""
    return DuplicateDetector(thresholds, synonyms).check(candidate, existing)
