"""Weekly payment schedule initialization."""

from datetime import date, datetime

from installment_tracker.models import LoanTerms, WeeklyPayment
from installment_tracker.status import classify_status
from installment_tracker.weeks import week_end, week_sequence


def initialize_schedule(
    loan_terms: LoanTerms,
    now: date | datetime | None = None,
) -> list[WeeklyPayment]:
    """Create an unpaid record for every week of the loan.

    Call once per loan, when the payment set is empty.

    Parameters
    ----------
    loan_terms : LoanTerms
        Terms providing the start Monday and duration.
    now : date | datetime | None
        Moment used to classify the new records, defaults to ``datetime.now()``.

    Returns
    -------
    list[WeeklyPayment]
        ``loan_duration_weeks`` records in week order.
    """
    now = now or datetime.now()
    return [
        WeeklyPayment(
            week_start_date=monday,
            week_end_date=week_end(monday),
            status=classify_status(None, week_end(monday), now),
        )
        for monday in week_sequence(loan_terms.loan_start_date, loan_terms.loan_duration_weeks)
    ]
