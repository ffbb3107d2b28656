"""Loader for the existing legislation record pool.

Reads a local export of the legislation table.  Supported formats:

  * ``.yaml`` / ``.yml`` / ``.json``: a list of records, or ``{records: [...]}``
  * ``.csv``: the spreadsheet layout (header row, then municipality, state,
    type, comma-separated breeds, ordinance, population, lat, lng,
    verification date, ordinance URL); ids are 1-based row numbers
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from bsl_tracker.dedup.detector import as_existing_record
from bsl_tracker.dedup.similarity import normalize_state
from bsl_tracker.errors import RecordsLoadError
from bsl_tracker.records import ExistingRecord
from bsl_tracker.utils.logger import log_error, log_info

_SHEET_COLUMNS = (
    "municipality",
    "state",
    "municipality_type",
    "banned_breeds",
    "ordinance",
    "population",
    "lat",
    "lng",
    "verification_date",
    "ordinance_url",
)

_cache: Dict[Path, List[ExistingRecord]] = {}


def records_from_sheet_rows(rows: Sequence[Sequence[str]]) -> List[ExistingRecord]:
    """Convert spreadsheet rows (header first) into records."""
    if len(rows) < 2:
        return []

    records = []
    for index, row in enumerate(rows[1:]):
        cells = {name: (row[i].strip() if i < len(row) else "") for i, name in enumerate(_SHEET_COLUMNS)}
        data: Dict[str, Any] = {k: v for k, v in cells.items() if v}
        data["id"] = index + 1
        data.setdefault("municipality", "")
        data.setdefault("state", "")
        # The sheet only distinguishes counties; everything else is a city
        data["municipality_type"] = "County" if cells["municipality_type"].lower() == "county" else "City"
        records.append(as_existing_record(data, index))
    return records


def _read_structured(path: Path) -> List[Any]:
    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh) if path.suffix == ".json" else yaml.safe_load(fh)
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = raw.get("records", [])
    if not isinstance(raw, list):
        raise RecordsLoadError(f"Expected a list of records in {path}")
    return raw


def load_legislation_records(path: Path | None = None) -> List[ExistingRecord]:
    """Load and validate the record pool, caching per path.

    Defaults to ``LEGISLATION_RECORDS_FILE`` from the configuration.

    Raises:
        RecordsLoadError: the file is missing, unreadable or malformed.
    """
    if path is None:
        from bsl_tracker.config import get_config

        path = Path(get_config().legislation_records_file)
    path = Path(path)

    if path in _cache:
        return _cache[path]

    if not path.exists():
        log_error("Legislation records file not found", path=str(path))
        raise RecordsLoadError(f"File not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            with open(path, "r", encoding="utf-8", newline="") as fh:
                records = records_from_sheet_rows(list(csv.reader(fh)))
        elif suffix in (".yaml", ".yml", ".json"):
            records = [as_existing_record(r, i) for i, r in enumerate(_read_structured(path))]
        else:
            raise RecordsLoadError(f"Unsupported records format: {path.suffix}")
    except RecordsLoadError:
        log_error("Failed to load legislation records", path=str(path))
        raise
    except Exception as exc:
        log_error("Failed to load legislation records", error=str(exc), path=str(path))
        raise RecordsLoadError(f"Could not load {path}: {exc}") from exc

    _cache[path] = records
    log_info("Loaded legislation records", path=str(path), record_count=len(records))
    return records


def _record_state(record: Any) -> str:
    if isinstance(record, Mapping):
        return record.get("state") or ""
    return record.state


def records_for_state(records: Sequence[Any], state: Optional[str]) -> List[Any]:
    """Pre-filter the pool to one state (full name or USPS code).

    Accepts records or plain mappings; mappings are validated later by the
    detector.
    """
    if not state:
        return list(records)
    wanted = normalize_state(state)
    return [r for r in records if normalize_state(_record_state(r)) == wanted]


def reset_cache() -> None:
    """Clear cached record pools (useful for tests)."""
    _cache.clear()
