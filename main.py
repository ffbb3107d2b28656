"""Command-line duplicate check for legislation submissions.

Loads environment variables, reads the local export of the legislation table
and reports existing records that likely duplicate the given submission.
Used by moderators and as a pre-submit gate (``--fail-on-duplicate``).
"""
from dotenv import load_dotenv
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Load environment variables first, before any other imports
load_dotenv()

from bsl_tracker.config import get_config
from bsl_tracker.dedup import DuplicateDetector, DedupThresholds
from bsl_tracker.errors import InvalidCandidateError, RecordsLoadError
from bsl_tracker.records_loader import load_legislation_records, records_for_state
from bsl_tracker.utils.logger import configure_logging, log_duplicate_detection, log_error

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DUPLICATES = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check a legislation submission for likely duplicates.")
    parser.add_argument('--municipality', required=True, help='Municipality name as submitted.')
    parser.add_argument('--state', required=True, help='State name or USPS code.')
    parser.add_argument('--type', dest='municipality_type', default='City', help='Municipality type: City or County.')
    parser.add_argument('--breeds', default='', help='Comma-separated banned breeds.')
    parser.add_argument('--legislation-type', default='ban', help='ban or restriction.')
    parser.add_argument('--records', type=str, help='Records file (.yaml, .json or .csv). Defaults to LEGISLATION_RECORDS_FILE.')
    parser.add_argument('--all-states', action='store_true', help='Compare against every state instead of pre-filtering.')
    parser.add_argument('--json', dest='as_json', action='store_true', help='Print the result as JSON.')
    parser.add_argument('--fail-on-duplicate', action='store_true', help='Exit with code 2 when duplicates are found.')
    return parser


def print_result(result, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    if not result.has_duplicates:
        print("✅ No likely duplicates found.")
        return

    print(f"⚠️  {len(result.matches)} possible duplicate(s), confidence: {result.confidence.value}")
    for match in result.matches:
        record = match.record
        print(f"  - #{record.id} {record.municipality}, {record.state} ({record.municipality_type.value}) "
              f"similarity={match.similarity:.2f}")
        for reason in match.reasons:
            print(f"      • {reason}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    configure_logging(config.log_level, config.log_format)

    issues = config.validate_configuration()
    if issues:
        log_error("Configuration validation failed", issues=issues)
        print("❌ Configuration issues found:")
        for issue in issues:
            print(f"  - {issue}")
        return EXIT_ERROR

    candidate = {
        "municipality": args.municipality,
        "state": args.state,
        "municipality_type": args.municipality_type,
        "banned_breeds": args.breeds,
        "legislation_type": args.legislation_type,
    }

    try:
        records = load_legislation_records(Path(args.records) if args.records else None)
        pool = records if args.all_states else records_for_state(records, args.state)
        detector = DuplicateDetector(DedupThresholds.from_config(config))
        result = detector.check(candidate, pool)
    except (InvalidCandidateError, RecordsLoadError) as exc:
        print(f"❌ {exc}")
        return EXIT_ERROR

    log_duplicate_detection(result, municipality=args.municipality, state=args.state)
    print_result(result, args.as_json)

    if args.fail_on_duplicate and result.has_duplicates:
        return EXIT_DUPLICATES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
