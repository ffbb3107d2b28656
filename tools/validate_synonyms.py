"""Validate config/breed_synonyms.yaml against the Pydantic schema.

Usage:
    python -m tools.validate_synonyms                              # validate default path
    python -m tools.validate_synonyms config/breed_synonyms.yaml   # validate specific file
    python -m tools.validate_synonyms --schema                     # emit JSON Schema to stdout
    python -m tools.validate_synonyms --schema -o schema/breed_synonyms.schema.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Tuple

import yaml

from bsl_tracker.dedup.synonyms import BreedSynonymTable


def validate_file(path: Path) -> Tuple[bool, List[str]]:
    """Validate a breed synonym YAML file.

    Returns (ok, messages): messages are errors when ok=False,
    or a success summary when ok=True.
    """
    if not path.exists():
        return False, [f"File not found: {path}"]

    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        return False, [f"YAML parse error: {exc}"]

    if not isinstance(raw, dict):
        return False, ["Top level must be a mapping with a 'canonical' key"]

    try:
        table = BreedSynonymTable(**raw)
    except Exception as exc:
        return False, [f"Schema validation failed: {exc}"]

    # Variants repeated under the same label are harmless but usually typos
    warnings: list[str] = []
    for label, variants in table.canonical.items():
        seen: set[str] = set()
        for variant in variants:
            key = variant.strip().lower()
            if key in seen or key == label.strip().lower():
                warnings.append(f"Variant '{variant}' repeated under '{label}'")
            seen.add(key)

    messages = [
        f"Valid: {len(table.canonical)} canonical breed(s), {table.variant_count()} name(s) mapped"
    ]
    for w in warnings:
        messages.append(f"[WARN] {w}")
    return True, messages


def generate_schema() -> dict:
    """Generate JSON Schema from the BreedSynonymTable Pydantic model."""
    return BreedSynonymTable.model_json_schema()


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate breed synonym configuration")
    parser.add_argument(
        "file",
        nargs="?",
        default="config/breed_synonyms.yaml",
        help="Path to breed_synonyms.yaml (default: config/breed_synonyms.yaml)",
    )
    parser.add_argument(
        "--schema",
        action="store_true",
        help="Output JSON Schema and exit",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Write schema to file instead of stdout",
    )
    args = parser.parse_args()

    if args.schema:
        output = json.dumps(generate_schema(), indent=2)
        if args.output:
            Path(args.output).parent.mkdir(parents=True, exist_ok=True)
            Path(args.output).write_text(output + "\n")
            print(f"Schema written to {args.output}")
        else:
            print(output)
        sys.exit(0)

    ok, messages = validate_file(Path(args.file))
    for msg in messages:
        symbol = "OK" if ok else "ERROR"
        print(f"[{symbol}] {msg}")

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
