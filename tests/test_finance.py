"""Tests for loan term and metric calculations."""

from datetime import date
from decimal import Decimal

import pytest

from installment_tracker.finance import compute_metrics, from_interest_rate, from_total_payable, to_decimal
from installment_tracker.models import LoanTerms, PaymentStatus, WeeklyPayment


def _payment(week_start: date, status: PaymentStatus, amount: int = 0) -> WeeklyPayment:
    return WeeklyPayment(
        week_start_date=week_start,
        payment_date=week_start if status == PaymentStatus.PAID else None,
        amount_paid=Decimal(amount),
        status=status,
    )


class TestFromInterestRate:
    """Tests for from_interest_rate."""

    def test_reference_loan(self, loan_start: date) -> None:
        terms = from_interest_rate(500000, 20, 25000, loan_start)

        assert terms.principal == 500000
        assert terms.interest_amount == 100000
        assert terms.effective_interest_rate == 20
        assert terms.total_payable == 600000
        assert terms.weekly_installment == 25000
        assert terms.loan_duration_weeks == 24
        assert terms.loan_start_date == loan_start

    def test_duration_rounds_up(self, loan_start: date) -> None:
        terms = from_interest_rate(500000, 20, 25001, loan_start)
        assert terms.loan_duration_weeks == 24

        terms = from_interest_rate(500000, 20, 24999, loan_start)
        assert terms.loan_duration_weeks == 25

    def test_zero_rate(self, loan_start: date) -> None:
        terms = from_interest_rate(1000, 0, 300, loan_start)
        assert terms.interest_amount == 0
        assert terms.total_payable == 1000
        assert terms.loan_duration_weeks == 4

    def test_amounts_are_decimal(self, loan_start: date) -> None:
        terms = from_interest_rate(1000.5, 7.5, 100, loan_start)
        assert isinstance(terms.principal, Decimal)
        assert isinstance(terms.total_payable, Decimal)
        assert terms.principal == Decimal("1000.5")

    def test_start_date_passed_through(self) -> None:
        wednesday = date(2024, 1, 3)
        assert from_interest_rate(1000, 10, 100, wednesday).loan_start_date == wednesday


class TestFromTotalPayable:
    """Tests for from_total_payable."""

    def test_reference_loan(self, loan_start: date) -> None:
        terms = from_total_payable(500000, 600000, 25000, loan_start)

        assert terms.interest_amount == 100000
        assert terms.effective_interest_rate == Decimal("20.0")
        assert terms.total_payable == 600000
        assert terms.loan_duration_weeks == 24

    def test_fractional_rate(self, loan_start: date) -> None:
        terms = from_total_payable(300, 400, 50, loan_start)
        assert terms.effective_interest_rate.quantize(Decimal("0.01")) == Decimal("33.33")
        assert terms.loan_duration_weeks == 8

    def test_derived_rate_rounded(self, loan_start: date) -> None:
        terms = from_total_payable(300, 400, 50, loan_start)
        assert terms.effective_interest_rate == Decimal("33.3333333333")

    def test_large_derived_rate(self, loan_start: date) -> None:
        terms = from_total_payable("0.01", "1E20", "1E17", loan_start)
        assert terms.effective_interest_rate == Decimal("9" * 22 + "00")

    @pytest.mark.parametrize(
        ("principal", "rate", "weekly"),
        [
            (500000, 20, 25000),
            (123456, "7.5", 3333),
            (18000, "12.25", 950),
            (1, 1, 1),
        ],
    )
    def test_consistent_with_rate_mode(self, loan_start: date, principal, rate, weekly) -> None:
        by_rate = from_interest_rate(principal, rate, weekly, loan_start)
        by_total = from_total_payable(principal, by_rate.total_payable, weekly, loan_start)

        assert by_total.total_payable == by_rate.total_payable
        assert by_total.loan_duration_weeks == by_rate.loan_duration_weeks
        assert by_total.interest_amount == by_rate.interest_amount


class TestComputeMetrics:
    """Tests for compute_metrics."""

    def test_mixed_schedule(self, loan_terms: LoanTerms) -> None:
        payments = [
            _payment(date(2024, 1, 1), PaymentStatus.PAID, 25000),
            _payment(date(2024, 1, 8), PaymentStatus.PAID, 25000),
            _payment(date(2024, 1, 15), PaymentStatus.MISSED),
            _payment(date(2024, 1, 22), PaymentStatus.PAID, 25000),
            _payment(date(2024, 1, 29), PaymentStatus.UPCOMING),
        ]

        metrics = compute_metrics(loan_terms, payments)

        assert metrics.amount_paid == 75000
        assert metrics.remaining_balance == 525000
        assert metrics.progress == Decimal("12.5")
        assert metrics.paid_weeks == 3
        assert metrics.missed_weeks == 1
        assert metrics.remaining_weeks == 21

    def test_only_paid_records_count(self, loan_terms: LoanTerms) -> None:
        unpaid_with_amount = WeeklyPayment(
            week_start_date=date(2024, 1, 1),
            amount_paid=Decimal("5000"),
            status=PaymentStatus.MISSED,
        )
        metrics = compute_metrics(loan_terms, [unpaid_with_amount])
        assert metrics.amount_paid == 0
        assert metrics.missed_weeks == 1

    def test_no_payments(self, loan_terms: LoanTerms) -> None:
        metrics = compute_metrics(loan_terms, [])
        assert metrics.amount_paid == 0
        assert metrics.remaining_balance == 600000
        assert metrics.progress == 0
        assert metrics.remaining_weeks == 24

    def test_overpaid_clamps_progress(self, loan_terms: LoanTerms) -> None:
        metrics = compute_metrics(loan_terms, [_payment(date(2024, 1, 1), PaymentStatus.PAID, 700000)])
        assert metrics.progress == 100
        assert metrics.remaining_balance == -100000
        assert metrics.remaining_weeks == 0

    def test_partial_week_rounds_up(self, loan_terms: LoanTerms) -> None:
        metrics = compute_metrics(loan_terms, [_payment(date(2024, 1, 1), PaymentStatus.PAID, 10000)])
        assert metrics.remaining_balance == 590000
        assert metrics.remaining_weeks == 24

    def test_zero_weekly_installment(self, loan_start: date) -> None:
        terms = LoanTerms(
            principal=Decimal("100"),
            interest_amount=Decimal("0"),
            effective_interest_rate=Decimal("0"),
            total_payable=Decimal("100"),
            weekly_installment=Decimal("0"),
            loan_duration_weeks=1,
            loan_start_date=loan_start,
        )
        assert compute_metrics(terms, []).remaining_weeks == 0

    def test_zero_total_payable(self, loan_start: date) -> None:
        terms = LoanTerms(
            principal=Decimal("0"),
            interest_amount=Decimal("0"),
            effective_interest_rate=Decimal("0"),
            total_payable=Decimal("0"),
            weekly_installment=Decimal("10"),
            loan_duration_weeks=1,
            loan_start_date=loan_start,
        )
        assert compute_metrics(terms, []).progress == 0


def test_to_decimal() -> None:
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("12.50") == Decimal("12.50")
    value = Decimal("3")
    assert to_decimal(value) is value
