"""Unit tests for sanitized logging helpers."""

import logging
from pathlib import Path

import pytest

from bsl_tracker.dedup.result import Confidence, DuplicateDetectionResult, DuplicateMatch
from bsl_tracker.utils.logger import (
    log_duplicate_detection,
    log_info,
    safe_json,
    sanitize_text,
)

pytestmark = pytest.mark.unit


class TestSanitize:
    def test_email_and_url_masked(self):
        text = "from jane@example.org see https://example.org/ordinance?id=4"
        assert sanitize_text(text) == "from <email> see <url>"

    def test_uuid_masked(self):
        assert sanitize_text("id 123e4567-e89b-12d3-a456-426614174000") == "id <uuid>"

    def test_plain_text_untouched(self):
        assert sanitize_text("Denver, CO") == "Denver, CO"
        assert sanitize_text("") == ""

    def test_safe_json_truncates(self):
        out = safe_json({"municipality": "x" * 50}, max_length=20)
        assert out.endswith("... [truncated]")

    def test_safe_json_non_serializable_uses_str(self):
        assert safe_json({"path": Path("data/legislation.yaml")}) == '{"path": "data/legislation.yaml"}'


class TestLogDuplicateDetection:
    def test_no_duplicates_logged_as_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="bsl-tracker"):
            log_duplicate_detection(DuplicateDetectionResult(matches=[]), municipality="Denver")

        assert caplog.records[-1].levelno == logging.INFO
        assert "No duplicate submissions found" in caplog.records[-1].getMessage()

    def test_duplicates_logged_as_warning(self, caplog, make_record):
        match = DuplicateMatch(record=make_record(42), similarity=1.0, reasons=["Exact location match"])
        result = DuplicateDetectionResult(matches=[match], confidence=Confidence.HIGH)

        with caplog.at_level(logging.INFO, logger="bsl-tracker"):
            log_duplicate_detection(result, state="CO")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert '"top_record_id": 42' in record.getMessage()
        assert '"confidence": "high"' in record.getMessage()

    def test_context_is_sanitized(self, caplog):
        with caplog.at_level(logging.INFO, logger="bsl-tracker"):
            log_info("Submission received", contact="jane@example.org")
        assert "jane@example.org" not in caplog.text
        assert "<email>" in caplog.text
