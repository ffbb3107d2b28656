"""Pytest configuration and fixtures for bsl-tracker tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bsl_tracker import config as config_module
from bsl_tracker import records_loader
from bsl_tracker.dedup import synonyms as synonyms_module
from bsl_tracker.dedup.synonyms import load_breed_synonyms
from bsl_tracker.dedup.thresholds import DedupThresholds
from bsl_tracker.records import CandidateRecord, ExistingRecord

SYNONYMS_FILE = project_root / "config" / "breed_synonyms.yaml"
RECORDS_FILE = project_root / "data" / "legislation.yaml"


@pytest.fixture(autouse=True)
def _reset_module_state():
    """Clear cached config, synonym tables and record pools around each test."""
    config_module._config = None
    synonyms_module.reset_cache()
    records_loader.reset_cache()
    yield
    config_module._config = None
    synonyms_module.reset_cache()
    records_loader.reset_cache()


@pytest.fixture
def synonyms():
    """The shipped breed synonym table."""
    return load_breed_synonyms(SYNONYMS_FILE)


@pytest.fixture
def thresholds():
    """Default weights and thresholds, independent of the environment."""
    return DedupThresholds()


@pytest.fixture
def make_record():
    """Factory for existing legislation records."""
    def _make(record_id=1, **overrides):
        data = {
            "id": record_id,
            "municipality": "Denver",
            "state": "CO",
            "municipality_type": "City",
            "banned_breeds": ["Pit Bull", "American Pit Bull Terrier"],
            "legislation_type": "ban",
        }
        data.update(overrides)
        return ExistingRecord(**data)

    return _make


@pytest.fixture
def make_candidate():
    """Factory for candidate submissions."""
    def _make(**overrides):
        data = {
            "municipality": "Denver",
            "state": "CO",
            "municipality_type": "City",
            "banned_breeds": ["Pit Bull"],
            "legislation_type": "ban",
        }
        data.update(overrides)
        return CandidateRecord(**data)

    return _make


@pytest.fixture
def denver_form():
    """Complete submission form state for Denver, CO."""
    return {
        "municipality": "Denver",
        "state": "CO",
        "municipality_type": "City",
        "banned_breeds": ["Pit Bull"],
        "legislation_type": "ban",
    }
