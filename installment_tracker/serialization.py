"""Conversion between models and the stored JSON document.

The document layout and camelCase field names are shared with existing
stored data and must not change::

    {
        "loanDetails": {"principal": ..., "loanStartDate": "2024-01-01", ...} | null,
        "payments": [{"weekStartDate": "2024-01-01", "status": "PAID", ...}],
        "pinHash": "..." | null
    }
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from installment_tracker.models import (
    AppState,
    InlineReceipt,
    LoanTerms,
    PaymentStatus,
    ReceiptImage,
    RemoteReceipt,
    WeeklyPayment,
)
from installment_tracker.weeks import iso_date, parse_iso_date


def serialize_number(value: Decimal | int | float) -> int | float:
    """Convert an amount to a JSON number, keeping whole amounts integral."""
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    return value


def parse_number(value: Any) -> Decimal:
    """Read a JSON number back as Decimal.

    Raises
    ------
    ValueError
        If ``value`` is not a finite number.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Expected a number, got {value!r}") from None
    if not number.is_finite():
        raise ValueError(f"Expected a finite number, got {value!r}")
    return number


def _require_mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected {what} to be an object, got {type(value).__name__}")
    return value


def _optional_str(value: Any, what: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected {what} to be a string, got {type(value).__name__}")
    return value


def receipt_to_reference(receipt: ReceiptImage) -> str | None:
    """Flatten a receipt variant to the single string stored in the document."""
    if receipt is None:
        return None
    if isinstance(receipt, RemoteReceipt):
        return receipt.url
    return receipt.data


def receipt_from_reference(reference: str | None) -> ReceiptImage:
    """Classify a stored receipt string.

    ``data:`` URLs and bare base64 strings are inline images; anything with a
    URL scheme is a remote reference.
    """
    if not reference:
        return None
    if not isinstance(reference, str):
        raise ValueError(f"Expected receipt reference to be a string, got {type(reference).__name__}")
    if reference.startswith("data:"):
        return InlineReceipt(reference)
    if "://" in reference:
        return RemoteReceipt(reference)
    return InlineReceipt(reference)


def loan_terms_to_dict(terms: LoanTerms) -> dict:
    return {
        "principal": serialize_number(terms.principal),
        "interestAmount": serialize_number(terms.interest_amount),
        "effectiveInterestRate": serialize_number(terms.effective_interest_rate),
        "totalPayable": serialize_number(terms.total_payable),
        "weeklyInstallment": serialize_number(terms.weekly_installment),
        "loanDurationWeeks": terms.loan_duration_weeks,
        "loanStartDate": iso_date(terms.loan_start_date),
    }


def loan_terms_from_dict(data: dict) -> LoanTerms:
    data = _require_mapping(data, "loanDetails")
    return LoanTerms(
        principal=parse_number(data["principal"]),
        interest_amount=parse_number(data["interestAmount"]),
        effective_interest_rate=parse_number(data["effectiveInterestRate"]),
        total_payable=parse_number(data["totalPayable"]),
        weekly_installment=parse_number(data["weeklyInstallment"]),
        loan_duration_weeks=int(data["loanDurationWeeks"]),
        loan_start_date=parse_iso_date(data["loanStartDate"]),
    )


def payment_to_dict(payment: WeeklyPayment) -> dict:
    return {
        "weekStartDate": iso_date(payment.week_start_date),
        "weekEndDate": iso_date(payment.week_end_date),
        "status": payment.status.value,
        "paymentDate": iso_date(payment.payment_date) if payment.payment_date else None,
        "amountPaid": serialize_number(payment.amount_paid),
        "receiptImage": receipt_to_reference(payment.receipt_image),
    }


def payment_from_dict(data: dict) -> WeeklyPayment:
    """Build a payment record from its stored form.

    The stored status is kept as-is (unknown values become ``UPCOMING``);
    callers recalculate before trusting it.
    """
    data = _require_mapping(data, "payment")
    try:
        status = PaymentStatus(data.get("status") or PaymentStatus.UPCOMING)
    except ValueError:
        status = PaymentStatus.UPCOMING

    week_end_date = data.get("weekEndDate")
    payment_date = data.get("paymentDate")

    return WeeklyPayment(
        week_start_date=parse_iso_date(data["weekStartDate"]),
        week_end_date=parse_iso_date(week_end_date) if week_end_date else None,
        payment_date=parse_iso_date(payment_date) if payment_date else None,
        amount_paid=parse_number(data.get("amountPaid") or 0),
        receipt_image=receipt_from_reference(data.get("receiptImage")),
        status=status,
    )


def state_to_dict(state: AppState) -> dict:
    return {
        "loanDetails": loan_terms_to_dict(state.loan_terms) if state.loan_terms else None,
        "payments": [payment_to_dict(p) for p in state.payments],
        "pinHash": state.pin_hash,
    }


def state_from_dict(data: dict | None) -> AppState | None:
    """Build the application state from a stored document.

    ``None`` (nothing stored yet) stays ``None``.
    """
    if data is None:
        return None
    data = _require_mapping(data, "document")
    loan_details = data.get("loanDetails")
    return AppState(
        loan_terms=loan_terms_from_dict(loan_details) if loan_details is not None else None,
        payments=[payment_from_dict(p) for p in data.get("payments") or []],
        pin_hash=_optional_str(data.get("pinHash"), "pinHash"),
    )
