"""Loan terms and weekly payment models."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from installment_tracker.models.enums import PaymentStatus
from installment_tracker.models.receipt import ReceiptImage


@dataclass(frozen=True)
class LoanTerms:
    """Financial terms of a loan.

    Replaced wholesale when the loan is set up again; never edited in place.
    """

    principal: Decimal
    interest_amount: Decimal
    effective_interest_rate: Decimal  # Percent (20 for 20%)
    total_payable: Decimal
    weekly_installment: Decimal
    loan_duration_weeks: int
    loan_start_date: date  # Monday


@dataclass(frozen=True)
class WeeklyPayment:
    """Payment record for one Monday-to-Sunday week.

    ``status`` is a cache of the classifier's answer and may be stale;
    ``payment_date`` is what marks a week as paid.
    """

    week_start_date: date  # Monday, unique within a schedule
    week_end_date: date | None = None  # Sunday, derived when omitted
    payment_date: date | None = None
    amount_paid: Decimal = Decimal("0")
    receipt_image: ReceiptImage = None
    status: PaymentStatus = field(default=PaymentStatus.UPCOMING)

    def __post_init__(self) -> None:
        if self.week_end_date is None:
            object.__setattr__(self, "week_end_date", self.week_start_date + timedelta(days=6))

    @property
    def is_paid(self) -> bool:
        return self.payment_date is not None
