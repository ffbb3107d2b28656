"""Configuration management using Pydantic BaseSettings.

Centralized settings for the duplicate detector, its data assets and
logging.  Values come from the environment or a local ``.env`` file.
"""
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from bsl_tracker.dedup.thresholds import (
    BREED_OVERLAP_THRESHOLD,
    BREED_WEIGHT,
    HIGH_CONFIDENCE_THRESHOLD,
    LEGISLATION_WEIGHT,
    LOCATION_WEIGHT,
    MATCH_THRESHOLD,
    MAX_MATCHES,
    MEDIUM_CONFIDENCE_THRESHOLD,
    NAME_SIMILARITY_THRESHOLD,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_SYNONYMS_FILE = PROJECT_ROOT / "config" / "breed_synonyms.yaml"
DEFAULT_RECORDS_FILE = PROJECT_ROOT / "data" / "legislation.yaml"


class Config(BaseSettings):
    """Main configuration class."""

    # Scoring weights
    dedup_location_weight: float = Field(LOCATION_WEIGHT, ge=0.0, le=1.0, description="Weight of the location signal")
    dedup_breed_weight: float = Field(BREED_WEIGHT, ge=0.0, le=1.0, description="Weight of the breed overlap signal")
    dedup_legislation_weight: float = Field(LEGISLATION_WEIGHT, ge=0.0, le=1.0, description="Weight of the legislation type signal")

    # Thresholds
    dedup_match_threshold: float = Field(MATCH_THRESHOLD, ge=0.0, le=1.0, description="Minimum composite score for a match")
    dedup_name_similarity_threshold: float = Field(NAME_SIMILARITY_THRESHOLD, ge=0.0, le=1.0, description="Minimum municipality name similarity")
    dedup_breed_overlap_threshold: float = Field(BREED_OVERLAP_THRESHOLD, ge=0.0, le=1.0, description="Minimum breed overlap")
    dedup_high_confidence: float = Field(HIGH_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0, description="Top score above which confidence is high")
    dedup_medium_confidence: float = Field(MEDIUM_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0, description="Top score above which confidence is medium")
    dedup_max_matches: int = Field(MAX_MATCHES, ge=1, le=50, description="Maximum matches returned")

    # Live check
    duplicate_check_debounce_ms: int = Field(1000, ge=0, le=10000, description="Idle delay before re-running a check")

    # Data assets
    breed_synonyms_file: str = Field(str(DEFAULT_SYNONYMS_FILE), description="Breed synonym table (YAML)")
    legislation_records_file: str = Field(str(DEFAULT_RECORDS_FILE), description="Existing legislation records")

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level: {v}. Valid options: {valid_levels}')
        return v.upper()

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any issues."""
        issues = []

        weight_sum = self.dedup_location_weight + self.dedup_breed_weight + self.dedup_legislation_weight
        if abs(weight_sum - 1.0) > 1e-6:
            issues.append(f"DEDUP_*_WEIGHT values must sum to 1.0 (got {weight_sum:.2f})")

        if self.dedup_medium_confidence >= self.dedup_high_confidence:
            issues.append("DEDUP_MEDIUM_CONFIDENCE must be lower than DEDUP_HIGH_CONFIDENCE")

        if self.dedup_match_threshold <= self.dedup_legislation_weight / max(weight_sum, 1e-9):
            issues.append("DEDUP_MATCH_THRESHOLD is very low, a matching legislation type alone would flag duplicates")

        if not Path(self.breed_synonyms_file).exists():
            issues.append(f"BREED_SYNONYMS_FILE not found: {self.breed_synonyms_file}")

        return issues

    def log_configuration(self) -> None:
        """Log the current configuration."""
        from bsl_tracker.utils.logger import log_info

        log_info("Configuration loaded",
                 location_weight=self.dedup_location_weight,
                 breed_weight=self.dedup_breed_weight,
                 legislation_weight=self.dedup_legislation_weight,
                 match_threshold=self.dedup_match_threshold,
                 max_matches=self.dedup_max_matches,
                 synonyms_file=self.breed_synonyms_file,
                 records_file=self.legislation_records_file,
                 log_level=self.log_level)


# Global configuration instance (lazy loading)
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global _config
    _config = Config()
    return _config
