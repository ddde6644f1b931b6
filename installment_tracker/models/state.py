"""Aggregate models: the stored document and dashboard metrics."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from installment_tracker.models.loan import LoanTerms, WeeklyPayment


@dataclass
class AppState:
    """Everything stored for one user, saved and loaded as a single document."""

    loan_terms: LoanTerms | None = None
    payments: list[WeeklyPayment] = field(default_factory=list)
    pin_hash: str | None = None

    def find_payment(self, week_start: date) -> WeeklyPayment | None:
        """Return the record for the week starting on ``week_start``, if any."""
        for payment in self.payments:
            if payment.week_start_date == week_start:
                return payment
        return None


@dataclass(frozen=True)
class LoanMetrics:
    """Progress and balance figures derived from a loan and its payments."""

    amount_paid: Decimal
    remaining_balance: Decimal  # Negative when overpaid
    progress: Decimal  # Percent, clamped to [0, 100]
    paid_weeks: int
    missed_weeks: int
    remaining_weeks: int
