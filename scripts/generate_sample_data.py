#!/usr/bin/env python3
"""Generate sample users for manual validation.

Each sample user gets a PIN, loan terms and a simulated payment history,
written as a JSON document under the data directory.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from installment_tracker.generators import PROFILES, SampleLoanGenerator
from installment_tracker.logging import setup_logging
from installment_tracker.store import JsonFileStateStore
from installment_tracker.weeks import parse_iso_date

logger = logging.getLogger(__name__)


def main() -> None:
    """Generate sample user documents."""
    parser = argparse.ArgumentParser(description="Generate sample installment tracker data")
    parser.add_argument(
        "--users",
        type=int,
        default=5,
        help="Number of sample users to generate (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=project_root / "local",
        help="Data directory to write documents to (default: ./local)",
    )
    parser.add_argument(
        "--profile",
        choices=PROFILES,
        default=None,
        help="Payer profile for every user (default: random per user)",
    )
    parser.add_argument(
        "--today",
        type=parse_iso_date,
        default=None,
        help="Reference date as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    args = parser.parse_args()

    setup_logging("INFO")
    reference_date = args.today or date.today()
    generator = SampleLoanGenerator(seed=args.seed)

    logger.info("=" * 60)
    logger.info("Generating %d sample users (seed %d, today %s)", args.users, args.seed, reference_date)
    logger.info("=" * 60)

    for _ in range(args.users):
        user_id, pin, state = generator.generate(reference_date=reference_date, profile=args.profile)
        store = JsonFileStateStore(args.output_dir, user_id, pretty=args.pretty)
        store.save(state)
        terms = state.loan_terms
        logger.info(
            "%s  PIN %s  total %s over %d weeks from %s",
            user_id,
            pin,
            terms.total_payable,
            terms.loan_duration_weeks,
            terms.loan_start_date.isoformat(),
        )

    logger.info("All documents saved to: %s", args.output_dir)


if __name__ == "__main__":
    main()
