#!/usr/bin/env python3
# scripts/guiderep_replay.py

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from guiderep.core.config import load_config
from guiderep.core.ledger import ReputationLedger
from guiderep.core.replay import load_operations, replay_operations
from guiderep.errors import ReputationError

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("guiderep_replay")


def main():
    parser = argparse.ArgumentParser(
        description="GuideRep Operation Replay Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay an operations file and write per-operation results
  guiderep_replay.py --input ops.json --output results.json

  # Also write the event log, abort on the first rejected operation
  guiderep_replay.py --input ops.json --output results.json \\
                     --events events.json --strict
        """,
    )

    parser.add_argument(
        "--input", required=True, help="JSON file with a list of operations"
    )
    parser.add_argument("--output", required=True, help="Output JSON file for results")
    parser.add_argument("--events", help="Optional JSON file for the event log")
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Configuration file path (default: config/config.yaml)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first rejected operation",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    input_path = Path(args.input).resolve()
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        sys.exit(1)

    try:
        operations = load_operations(input_path)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load operations: {e}")
        sys.exit(1)

    ledger = ReputationLedger(config=config)
    try:
        results = replay_operations(ledger, operations, stop_on_error=args.strict)
    except ReputationError as e:
        logger.error(f"Replay aborted: {e}")
        sys.exit(2)

    output_path = Path(args.output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([r.model_dump(mode="json") for r in results], f, indent=2)

    if args.events:
        ledger.journal.generate_event_log(args.events)

    rejected = sum(1 for r in results if not r.ok)
    logger.info(
        f"Replay complete. Wrote {len(results)} results ({rejected} rejected) to {output_path}"
    )


if __name__ == "__main__":
    main()
