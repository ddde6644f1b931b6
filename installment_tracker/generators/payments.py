"""Simulated payment behaviour for sample schedules."""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from installment_tracker.models import LoanTerms, WeeklyPayment
from installment_tracker.status import recalculate_all

PROFILES = ("good", "occasional_missed", "partial", "defaulter")


class PaymentBehavior:
    """Fill in payments for the weeks that have already started.

    Parameters
    ----------
    rng : random.Random | None
        Random source; a fresh unseeded one when omitted.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def choose_profile(
        self,
        on_time_rate: float = 0.70,
        missed_rate: float = 0.15,
        partial_rate: float = 0.10,
        default_rate: float = 0.05,
    ) -> str:
        """Pick a payer profile by weight."""
        return self.rng.choices(
            PROFILES,
            weights=[on_time_rate, missed_rate, partial_rate, default_rate],
            k=1,
        )[0]

    def apply(
        self,
        loan_terms: LoanTerms,
        payments: list[WeeklyPayment],
        reference_date: date | datetime,
        profile: str | None = None,
    ) -> list[WeeklyPayment]:
        """Apply a payer profile to a schedule.

        Parameters
        ----------
        loan_terms : LoanTerms
            Loan providing the weekly installment.
        payments : list[WeeklyPayment]
            Schedule to fill, in week order.
        reference_date : date | datetime
            "Today"; weeks starting after it stay unpaid.
        profile : str | None
            One of ``PROFILES``, chosen at random when omitted.

        Returns
        -------
        list[WeeklyPayment]
            New records with payments applied and statuses recalculated.
        """
        profile = profile or self.choose_profile()
        if profile not in PROFILES:
            raise ValueError(f"Unknown payment profile: {profile}")

        today = reference_date.date() if isinstance(reference_date, datetime) else reference_date
        installment = loan_terms.weekly_installment
        paid_weeks_before_default = self.rng.randint(2, 6)

        result = []
        for number, payment in enumerate(payments, start=1):
            if payment.week_start_date > today:
                result.append(payment)
                continue

            if profile == "good":
                amount = installment
            elif profile == "occasional_missed":
                amount = installment if self.rng.random() < 0.8 else None
            elif profile == "partial":
                share = Decimal(str(round(self.rng.uniform(0.5, 1.0), 2)))
                amount = (installment * share).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            else:  # defaulter
                amount = installment if number <= paid_weeks_before_default else None

            if amount is None:
                result.append(payment)
            else:
                result.append(replace(payment, payment_date=payment.week_start_date, amount_paid=amount))

        return recalculate_all(result, reference_date)
