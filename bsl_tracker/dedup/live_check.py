"""Debounced duplicate checking for the submission form.

The detector itself is synchronous.  This module re-runs it after the
submitter stops editing: each ``update`` cancels the pending check and starts
a new idle timer, so only the latest form state is ever scored.
"""

import asyncio
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from bsl_tracker.dedup.detector import DuplicateDetector
from bsl_tracker.dedup.result import Confidence, DuplicateDetectionResult
from bsl_tracker.dedup.synonyms import BreedSynonymTable
from bsl_tracker.dedup.thresholds import DedupThresholds
from bsl_tracker.errors import DedupInputError, InvalidCandidateError, RecordsLoadError
from bsl_tracker.records import ExistingRecord
from bsl_tracker.records_loader import records_for_state
from bsl_tracker.utils.logger import log_debug, log_duplicate_detection, log_error, log_warning

RecordSource = Union[Sequence[ExistingRecord], Callable[[], Sequence[ExistingRecord]]]


def can_check_duplicates(form_data: Mapping[str, Any]) -> bool:
    """Return True when the form holds every field the detector needs."""
    municipality = form_data.get("municipality")
    breeds = form_data.get("banned_breeds") or []
    return bool(
        isinstance(municipality, str)
        and municipality.strip()
        and form_data.get("state")
        and form_data.get("municipality_type")
        and len(breeds) > 0
        and form_data.get("legislation_type")
    )


class DebouncedDuplicateCheck:
    """Cancel-and-restart duplicate checking for live form input."""

    def __init__(
        self,
        records: RecordSource,
        debounce_ms: Optional[int] = None,
        thresholds: Optional[DedupThresholds] = None,
        synonyms: Optional[BreedSynonymTable] = None,
    ):
        """Initialize the checker.

        Args:
            records: Existing record pool, or a callable returning it
            debounce_ms: Idle delay before a check runs (configured default)
            thresholds: Scoring thresholds passed to the detector
            synonyms: Breed synonym table passed to the detector
        """
        if debounce_ms is None:
            from bsl_tracker.config import get_config

            debounce_ms = get_config().duplicate_check_debounce_ms
        self.debounce_seconds = debounce_ms / 1000.0
        self._records = records
        self.detector = DuplicateDetector(thresholds, synonyms)
        self.result: Optional[DuplicateDetectionResult] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_checking(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def has_duplicates(self) -> bool:
        return self.result.has_duplicates if self.result else False

    @property
    def confidence(self) -> Confidence:
        return self.result.confidence if self.result else Confidence.LOW

    @property
    def match_count(self) -> int:
        return len(self.result.matches) if self.result else 0

    def update(self, form_data: Mapping[str, Any]) -> asyncio.Task:
        """Schedule a check of *form_data*, superseding any pending one.

        Must be called from a running event loop.
        """
        self.cancel()
        snapshot = dict(form_data)
        self._task = asyncio.get_running_loop().create_task(self._run(snapshot))
        return self._task

    def cancel(self) -> None:
        """Drop the pending check, if any; the last result is kept."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> Optional[DuplicateDetectionResult]:
        """Wait for the latest scheduled check and return its result."""
        while self._task is not None:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if task is self._task:
                break
        return self.result

    def _load_records(self) -> Sequence[ExistingRecord]:
        return self._records() if callable(self._records) else self._records

    async def _run(self, form_data: Mapping[str, Any]) -> Optional[DuplicateDetectionResult]:
        await asyncio.sleep(self.debounce_seconds)

        if not can_check_duplicates(form_data):
            log_debug("Form incomplete; skipping duplicate check")
            self.result = None
            return None

        # A failed check clears the result so an earlier form's matches are not shown
        try:
            records = self._load_records()
        except (RecordsLoadError, DedupInputError) as exc:
            log_error("Could not load records for duplicate check", error=str(exc))
            self.result = None
            return None

        if not records:
            log_debug("No existing records to compare against")
            self.result = None
            return None

        pool = records_for_state(records, form_data.get("state"))
        try:
            result = self.detector.check(form_data, pool)
        except InvalidCandidateError as exc:
            log_warning("Form data rejected by duplicate check", error=str(exc))
            self.result = None
            return None
        except DedupInputError as exc:
            log_error("Invalid record in duplicate check pool", error=str(exc))
            self.result = None
            return None

        log_duplicate_detection(
            result,
            municipality=form_data.get("municipality"),
            state=form_data.get("state"),
        )
        self.result = result
        return result
