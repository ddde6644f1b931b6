#!/usr/bin/env python3
"""Print a user's payment schedule and loan progress.

Storage is selected from the environment (see ``TrackerConfig.from_env``).
Loading recalculates every week's status and saves the result back.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from installment_tracker.config import TrackerConfig
from installment_tracker.exceptions import TrackerError
from installment_tracker.logging import setup_logging
from installment_tracker.models import OnboardingStage
from installment_tracker.tracker import InstallmentTracker
from installment_tracker.weeks import iso_date, week_index

logger = logging.getLogger(__name__)

STATUS_ICONS = {"PAID": "✓", "MISSED": "✗", "UPCOMING": "○"}


def main() -> int:
    """Print the schedule for the configured user."""
    parser = argparse.ArgumentParser(description="Show weekly payment schedule and progress")
    parser.add_argument(
        "--user-id",
        type=str,
        default=None,
        help="User id (default: TRACKER_USER_ID)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Data directory for the JSON store (default: TRACKER_DATA_DIR)",
    )
    args = parser.parse_args()

    config = TrackerConfig.from_env()
    if args.user_id:
        config.user_id = args.user_id
    if args.data_dir:
        config.storage.data_dir = args.data_dir
        config.receipts.receipt_dir = args.data_dir
    setup_logging(config.log_level, config.log_format)

    try:
        tracker = InstallmentTracker.from_config(config)
        stage = tracker.stage()
        if stage != OnboardingStage.READY:
            logger.warning("Onboarding incomplete for %s (next step: %s)", config.user_id, stage.value)
            return 1

        state = tracker.load()
        terms = state.loan_terms
        print(f"Loan from {iso_date(terms.loan_start_date)}: {terms.total_payable} "
              f"({terms.effective_interest_rate}% interest) at {terms.weekly_installment}/week")
        print("-" * 60)
        for payment in state.payments:
            number = week_index(payment.week_start_date, terms.loan_start_date) + 1
            paid_on = iso_date(payment.payment_date) if payment.payment_date else "-"
            print(
                f"Week {number:3d}  {iso_date(payment.week_start_date)}  "
                f"{STATUS_ICONS[payment.status.value]} {payment.status.value:<8}  "
                f"{paid_on:<10}  {payment.amount_paid}"
            )

        metrics = tracker.metrics()
        print("-" * 60)
        print(f"Paid:      {metrics.amount_paid} ({metrics.progress:.1f}%)")
        print(f"Remaining: {metrics.remaining_balance} (~{metrics.remaining_weeks} weeks)")
        print(f"Weeks:     {metrics.paid_weeks} paid, {metrics.missed_weeks} missed")
    except TrackerError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
