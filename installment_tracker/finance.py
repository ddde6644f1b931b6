"""Loan term and dashboard metric calculations.

Loan terms can be entered two ways:

1. Interest rate (%), from which the interest amount is derived.
2. Final total payable, from which the effective rate is derived.

Both produce the same ``LoanTerms`` shape. Inputs are not validated here;
callers run ``installment_tracker.validation`` first.
"""

import math
from datetime import date
from decimal import Decimal, localcontext

from installment_tracker.models import LoanMetrics, LoanTerms, PaymentStatus, WeeklyPayment

HUNDRED = Decimal("100")
ZERO = Decimal("0")
# Precision of derived interest rates
RATE_PLACES = Decimal("1E-10")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a number to Decimal through its string form."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round_rate(rate: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, rate.adjusted() + 12)
        return rate.quantize(RATE_PLACES)


def _duration_weeks(total_payable: Decimal, weekly_installment: Decimal) -> int:
    return math.ceil(total_payable / weekly_installment)


def from_interest_rate(
    principal: Decimal | int | float | str,
    interest_rate: Decimal | int | float | str,
    weekly_installment: Decimal | int | float | str,
    loan_start_date: date,
) -> LoanTerms:
    """Calculate loan terms from principal and a flat interest rate.

    Parameters
    ----------
    principal : Decimal | int | float | str
        Amount borrowed.
    interest_rate : Decimal | int | float | str
        Interest over the whole loan, in percent (20 for 20%).
    weekly_installment : Decimal | int | float | str
        Fixed weekly payment.
    loan_start_date : date
        First week's Monday, passed through unchanged.

    Returns
    -------
    LoanTerms
        Derived terms; the effective rate equals ``interest_rate``.
    """
    principal = to_decimal(principal)
    rate = to_decimal(interest_rate)
    weekly = to_decimal(weekly_installment)

    interest_amount = principal * (rate / HUNDRED)
    total_payable = principal + interest_amount

    return LoanTerms(
        principal=principal,
        interest_amount=interest_amount,
        effective_interest_rate=rate,
        total_payable=total_payable,
        weekly_installment=weekly,
        loan_duration_weeks=_duration_weeks(total_payable, weekly),
        loan_start_date=loan_start_date,
    )


def from_total_payable(
    principal: Decimal | int | float | str,
    total_payable: Decimal | int | float | str,
    weekly_installment: Decimal | int | float | str,
    loan_start_date: date,
) -> LoanTerms:
    """Calculate loan terms from principal and the final amount payable.

    ``total_payable`` is expected to exceed ``principal``. The effective rate
    is rounded to ``RATE_PLACES``.
    """
    principal = to_decimal(principal)
    total = to_decimal(total_payable)
    weekly = to_decimal(weekly_installment)

    interest_amount = total - principal
    effective_rate = _round_rate(interest_amount / principal * HUNDRED)

    return LoanTerms(
        principal=principal,
        interest_amount=interest_amount,
        effective_interest_rate=effective_rate,
        total_payable=total,
        weekly_installment=weekly,
        loan_duration_weeks=_duration_weeks(total, weekly),
        loan_start_date=loan_start_date,
    )


def compute_metrics(loan_terms: LoanTerms, payments: list[WeeklyPayment]) -> LoanMetrics:
    """Fold payments against loan terms into dashboard figures.

    Only records whose cached status is ``PAID`` count towards the amount
    paid, so run ``recalculate_all`` first when statuses may be stale.

    Parameters
    ----------
    loan_terms : LoanTerms
        Terms of the loan.
    payments : list[WeeklyPayment]
        Payment records; any count is accepted.

    Returns
    -------
    LoanMetrics
        Amount paid, remaining balance (not clamped), progress percent
        (clamped to [0, 100]) and week counts.
    """
    paid = [p for p in payments if p.status == PaymentStatus.PAID]
    amount_paid = sum((to_decimal(p.amount_paid) for p in paid), ZERO)
    missed_weeks = sum(1 for p in payments if p.status == PaymentStatus.MISSED)

    remaining_balance = loan_terms.total_payable - amount_paid

    if loan_terms.total_payable > 0:
        progress = amount_paid / loan_terms.total_payable * HUNDRED
    else:
        progress = ZERO
    progress = min(HUNDRED, max(ZERO, progress))

    if loan_terms.weekly_installment > 0:
        remaining_weeks = max(0, math.ceil(remaining_balance / loan_terms.weekly_installment))
    else:
        remaining_weeks = 0

    return LoanMetrics(
        amount_paid=amount_paid,
        remaining_balance=remaining_balance,
        progress=progress,
        paid_weeks=len(paid),
        missed_weeks=missed_weeks,
        remaining_weeks=remaining_weeks,
    )
