"""Input validation run before any calculation.

The calculators assume clean input; these checks turn raw form values into
typed ones or raise ``ValidationError`` with a message fit for the user.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from installment_tracker.exceptions import ValidationError
from installment_tracker.models import InterestInputType
from installment_tracker.weeks import parse_iso_date

# Longest schedule accepted, in weeks (100 years)
MAX_LOAN_WEEKS = 5200


def parse_amount(value: Decimal | int | float | str | None, field: str, message: str) -> Decimal:
    """Parse a numeric input into a finite Decimal.

    Raises
    ------
    ValidationError
        If the value is missing, blank or not a finite number.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(message, field=field)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(message, field=field) from None
    if not amount.is_finite():
        raise ValidationError(message, field=field)
    return amount


def parse_start_date(value: date | datetime | str | None) -> date:
    """Parse the loan start date from a date or ``YYYY-MM-DD`` string."""
    message = "Please select a loan start date"
    if value is None or value == "":
        raise ValidationError(message, field="loan_start_date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(message, field="loan_start_date") from None


def validate_loan_inputs(
    principal: Decimal | int | float | str | None,
    weekly_installment: Decimal | int | float | str | None,
    loan_start_date: date | datetime | str | None,
    input_type: InterestInputType | str = InterestInputType.RATE,
    interest_rate: Decimal | int | float | str | None = None,
    total_payable: Decimal | int | float | str | None = None,
) -> dict:
    """Validate the loan setup form.

    Parameters
    ----------
    principal : Decimal | int | float | str | None
        Purchase price; must be positive.
    weekly_installment : Decimal | int | float | str | None
        Weekly payment; must be positive.
    loan_start_date : date | datetime | str | None
        Any day of the first week.
    input_type : InterestInputType | str
        ``rate`` or ``total``; selects which of the next two is required.
    interest_rate : Decimal | int | float | str | None
        Percent, zero or more. Required for ``rate``.
    total_payable : Decimal | int | float | str | None
        Must exceed the principal. Required for ``total``.

    Returns
    -------
    dict
        Parsed values: ``principal``, ``weekly_installment``,
        ``loan_start_date``, ``input_type`` and either ``interest_rate`` or
        ``total_payable``.

    Raises
    ------
    ValidationError
        On the first invalid input, in form order.
    """
    message = "Please enter a valid purchase price"
    principal_num = parse_amount(principal, "principal", message)
    if principal_num <= 0:
        raise ValidationError(message, field="principal")

    message = "Please enter a valid weekly installment amount"
    weekly_num = parse_amount(weekly_installment, "weekly_installment", message)
    if weekly_num <= 0:
        raise ValidationError(message, field="weekly_installment")

    start = parse_start_date(loan_start_date)

    try:
        mode = InterestInputType(input_type)
    except ValueError:
        raise ValidationError(f"Unknown interest input type: {input_type!r}", field="input_type") from None

    values = {
        "principal": principal_num,
        "weekly_installment": weekly_num,
        "loan_start_date": start,
        "input_type": mode,
    }

    if mode == InterestInputType.RATE:
        message = "Please enter a valid interest rate"
        rate = parse_amount(interest_rate, "interest_rate", message)
        if rate < 0:
            raise ValidationError(message, field="interest_rate")
        values["interest_rate"] = rate
        total_num = principal_num + principal_num * rate / 100
    else:
        message = "Total payable must be greater than purchase price"
        total = parse_amount(total_payable, "total_payable", message)
        if total <= principal_num:
            raise ValidationError(message, field="total_payable")
        values["total_payable"] = total
        total_num = total

    weeks = math.ceil(total_num / weekly_num)
    last_day = (date.max - start).days
    if weeks > MAX_LOAN_WEEKS or weeks * 7 - 1 > last_day:
        raise ValidationError(
            f"Weekly installment is too small: the loan would run longer than {MAX_LOAN_WEEKS} weeks",
            field="weekly_installment",
        )

    return values


def validate_payment_amount(amount: Decimal | int | float | str | None) -> Decimal:
    """Validate the amount entered for a weekly payment; must be positive."""
    message = "Please enter a valid amount"
    value = parse_amount(amount, "amount_paid", message)
    if value <= 0:
        raise ValidationError(message, field="amount_paid")
    return value
