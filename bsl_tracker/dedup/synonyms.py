"""Breed synonym table.

Reads config/breed_synonyms.yaml, a mapping of canonical breed labels to the
name variants submitters use for them.  The table is data: extending it never
requires touching the scoring code.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from bsl_tracker.utils.logger import log_error, log_info, log_warning

_RE_WS = re.compile(r"\s+")


def _breed_key(name: str) -> str:
    return _RE_WS.sub(" ", name.strip().lower())


class BreedSynonymTable(BaseModel):
    """Canonical label → variants, with a case-insensitive reverse index."""

    canonical: Dict[str, List[str]] = Field(
        default_factory=dict, description="canonical breed label → name variants"
    )

    _index: Dict[str, str] = PrivateAttr(default_factory=dict)

    @field_validator("canonical", mode="after")
    @classmethod
    def validate_labels(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        for label, variants in v.items():
            if not label.strip():
                raise ValueError("canonical breed labels must not be blank")
            if any(not variant.strip() for variant in variants):
                raise ValueError(f"blank variant listed under '{label}'")
        return v

    @model_validator(mode="after")
    def build_index(self) -> "BreedSynonymTable":
        index: Dict[str, str] = {}
        for label, variants in self.canonical.items():
            canonical = _breed_key(label)
            for variant in [label, *variants]:
                key = _breed_key(variant)
                owner = index.get(key)
                if owner is not None and owner != canonical:
                    raise ValueError(
                        f"variant '{variant}' maps to both '{owner}' and '{canonical}'"
                    )
                index[key] = canonical
        self._index = index
        return self

    def canonical_for(self, breed: str) -> str:
        """Lowercased canonical label for *breed* (the breed itself if unknown)."""
        key = _breed_key(breed)
        return self._index.get(key, key)

    def variant_count(self) -> int:
        return len(self._index)


_cache: Dict[Path, BreedSynonymTable] = {}


def load_breed_synonyms(path: Path | None = None) -> BreedSynonymTable:
    """Load the synonym table from YAML.

    Defaults to ``BREED_SYNONYMS_FILE`` from the configuration.  A missing
    file yields an empty table, so breeds are compared by name only.
    """
    if path is None:
        from bsl_tracker.config import get_config

        path = Path(get_config().breed_synonyms_file)
    path = Path(path)

    cached = _cache.get(path)
    if cached is not None:
        return cached

    if not path.exists():
        log_warning("Breed synonym file not found; comparing breeds by name only", path=str(path))
        table = BreedSynonymTable()
        _cache[path] = table
        return table

    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        table = BreedSynonymTable(**raw)
    except Exception as exc:
        log_error("Failed to load breed synonyms", error=str(exc), path=str(path))
        raise

    _cache[path] = table
    log_info(
        "Loaded breed synonyms",
        path=str(path),
        canonical_count=len(table.canonical),
        variant_count=table.variant_count(),
    )
    return table


def get_breed_synonyms(synonyms: Optional[BreedSynonymTable] = None) -> BreedSynonymTable:
    """Return *synonyms* when injected, otherwise the configured table."""
    return synonyms if synonyms is not None else load_breed_synonyms()


def reset_cache() -> None:
    """Clear cached tables (useful for tests)."""
    _cache.clear()
