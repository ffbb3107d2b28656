"""Exceptions raised by the tracker.

"No duplicates found" is never an error; these only signal bad input or
unreadable data assets.
"""

from __future__ import annotations


class DedupInputError(ValueError):
    """Input handed to the duplicate detector could not be validated."""


class InvalidCandidateError(DedupInputError):
    """The candidate submission is missing or has malformed required fields."""


class InvalidRecordError(DedupInputError):
    """An existing legislation record could not be validated."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class RecordsLoadError(Exception):
    """The existing-record pool could not be read from disk."""
