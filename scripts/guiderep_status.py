#!/usr/bin/env python3
# scripts/guiderep_status.py

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from guiderep.core.config import load_config
from guiderep.core.ledger import ReputationLedger
from guiderep.core.replay import load_operations, replay_operations
from guiderep.credibility.verifier import format_fixed_point

# Configure logging
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("guiderep_status")


def _fmt(value: Optional[int], scale: int) -> str:
    return format_fixed_point(value, scale) if value is not None else "-"


def collect_status(ledger: ReputationLedger, identities: List[str]) -> List[Dict[str, Any]]:
    """Build one status row per guide."""
    scale = ledger.config.verification.scale
    rows = []
    for identity in identities:
        guide = ledger.guide(identity)
        if guide is None:
            logger.warning(f"Unknown guide: {identity}")
            continue
        report = ledger.verification_report(identity)
        rows.append(
            {
                "identity": identity,
                "status": ledger.guide_status(identity).value,
                "verified": guide.is_verified,
                "feedback_count": guide.feedback_count,
                "match_count": guide.match_count,
                "total_ratings": guide.total_ratings,
                "avg_expertise": _fmt(report.avg_expertise, scale),
                "avg_help": _fmt(report.avg_help, scale),
                "avg_recommend": _fmt(report.avg_recommend, scale),
                "avg_overall": _fmt(report.avg_overall, scale),
                "failed_rule": report.failed_rule,
                "balance": ledger.balance_of(identity),
                "rewards_issued": ledger.rewards_issued(identity),
            }
        )
    return rows


def print_table(rows: List[Dict[str, Any]]) -> None:
    header = f"{'GUIDE':<20} {'STATUS':<13} {'RATINGS':>7} {'EXP':>6} {'HELP':>6} {'REC':>6} {'ALL':>6} {'BALANCE':>8}"
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row['identity']:<20} {row['status']:<13} {row['total_ratings']:>7} "
            f"{row['avg_expertise']:>6} {row['avg_help']:>6} {row['avg_recommend']:>6} "
            f"{row['avg_overall']:>6} {row['balance']:>8}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="GuideRep Guide Status Report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Status of every guide after replaying an operations file
  guiderep_status.py --input ops.json

  # Selected guides as JSON
  guiderep_status.py --input ops.json --guide alice --guide bob --json
        """,
    )

    parser.add_argument(
        "--input", required=True, help="JSON file with a list of operations"
    )
    parser.add_argument(
        "--guide", action="append", help="Guide identity to report (default: all)"
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Configuration file path (default: config/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    try:
        operations = load_operations(Path(args.input).resolve())
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load operations: {e}")
        sys.exit(1)

    ledger = ReputationLedger(config=config)
    replay_operations(ledger, operations)

    rows = collect_status(ledger, args.guide or ledger.guides())
    if args.json:
        print(json.dumps(rows, indent=2))
    else:
        print_table(rows)


if __name__ == "__main__":
    main()
