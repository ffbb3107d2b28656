"""Sanitized logging utilities for the tracker.

Submissions carry contributor emails and ordinance links; context values are
scrubbed before they reach the log output.
"""
import json
import logging
import re
from typing import Any, Optional

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger('bsl-tracker')


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Apply the configured level and format to the tracker logger."""
    logger.setLevel(level.upper())
    if fmt:
        formatter = logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


def sanitize_text(text: str) -> str:
    """Remove sensitive information from text.

    Args:
        text: Input text that may contain sensitive data

    Returns:
        Sanitized text with sensitive patterns replaced
    """
    if not text:
        return text

    text = re.sub(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}', '<email>', text)
    text = re.sub(r'https?://[^\s"]+', '<url>', text)
    text = re.sub(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', '<uuid>', text, flags=re.IGNORECASE)
    text = re.sub(r'\b[a-zA-Z0-9_-]{32,}\b', '<token>', text)

    return text


def safe_json(obj: Any, max_length: int = 1000) -> str:
    """Serialize object to JSON with sensitive data sanitized.

    Args:
        obj: Object to serialize
        max_length: Maximum length of output string

    Returns:
        Sanitized JSON string
    """
    try:
        json_str = json.dumps(obj, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return "<unable to serialize>"

    sanitized = sanitize_text(json_str)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "... [truncated]"
    return sanitized


def log_info(message: str, **kwargs) -> None:
    """Log info message with optional sanitized context."""
    if kwargs:
        logger.info(f"{message} | Context: {safe_json(kwargs)}")
    else:
        logger.info(message)


def log_warning(message: str, **kwargs) -> None:
    """Log warning message with optional sanitized context."""
    if kwargs:
        logger.warning(f"{message} | Context: {safe_json(kwargs)}")
    else:
        logger.warning(message)


def log_error(message: str, **kwargs) -> None:
    """Log error message with optional sanitized context."""
    if kwargs:
        logger.error(f"{message} | Context: {safe_json(kwargs)}")
    else:
        logger.error(message)


def log_debug(message: str, **kwargs) -> None:
    """Log debug message with optional sanitized context."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if kwargs:
        logger.debug(f"{message} | Context: {safe_json(kwargs)}")
    else:
        logger.debug(message)


def log_duplicate_detection(result: Any, **kwargs) -> None:
    """Log the outcome of a duplicate check.

    Args:
        result: ``DuplicateDetectionResult`` returned by the detector
        **kwargs: Additional context (municipality, state, ...)
    """
    if not result.has_duplicates:
        log_info("No duplicate submissions found", **kwargs)
        return

    top = result.matches[0]
    log_warning(
        "Possible duplicate submission",
        confidence=result.confidence.value,
        match_count=len(result.matches),
        top_record_id=top.record.id,
        top_similarity=top.similarity,
        **kwargs,
    )
