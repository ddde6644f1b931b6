"""Payment status classification.

Status is never stored as truth. It is derived from a record's payment date,
its week end and the current time, and recomputed on every load:

- a recorded payment date means ``PAID``, even when that date lies in the future;
- otherwise a week whose Sunday has passed is ``MISSED``;
- anything else is ``UPCOMING``.
"""

from dataclasses import replace
from datetime import date, datetime, time

from installment_tracker.models import PaymentStatus, WeeklyPayment


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def classify_status(
    payment_date: date | None,
    week_end_date: date | None,
    now: date | datetime,
) -> PaymentStatus:
    """Classify a week from its payment date and week end.

    Parameters
    ----------
    payment_date : date | None
        Date the week was paid, ``None`` if unpaid.
    week_end_date : date | None
        Sunday of the week, ``None`` if unknown.
    now : date | datetime
        Current moment. The week end is taken at midnight, so a week counts
        as missed once its Sunday has begun.

    Returns
    -------
    PaymentStatus
        Derived status.
    """
    if payment_date is not None:
        return PaymentStatus.PAID

    if week_end_date is not None and _as_datetime(now) > _as_datetime(week_end_date):
        return PaymentStatus.MISSED

    return PaymentStatus.UPCOMING


def payment_status(payment: WeeklyPayment | None, now: date | datetime | None = None) -> PaymentStatus:
    """Classify a payment record; a missing record is ``UPCOMING``."""
    if payment is None:
        return PaymentStatus.UPCOMING
    return classify_status(payment.payment_date, payment.week_end_date, now or datetime.now())


def recalculate_all(
    payments: list[WeeklyPayment],
    now: date | datetime | None = None,
) -> list[WeeklyPayment]:
    """Re-derive the status of every record against ``now``.

    Only ``status`` changes; order and every other field are preserved.
    Safe to run on every load.

    Parameters
    ----------
    payments : list[WeeklyPayment]
        Records in schedule order.
    now : date | datetime | None
        Current moment, defaults to ``datetime.now()``. One value is used for
        the whole pass.

    Returns
    -------
    list[WeeklyPayment]
        New records with fresh statuses.
    """
    now = now or datetime.now()
    return [
        replace(payment, status=classify_status(payment.payment_date, payment.week_end_date, now))
        for payment in payments
    ]
