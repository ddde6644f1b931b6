"""Sample loan generator for demos and manual testing."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from decimal import Decimal

from installment_tracker.finance import from_interest_rate, from_total_payable
from installment_tracker.generators.base import BaseGenerator
from installment_tracker.generators.payments import PaymentBehavior
from installment_tracker.models import AppState, InterestInputType
from installment_tracker.pin import hash_pin
from installment_tracker.schedule import initialize_schedule
from installment_tracker.weeks import monday_of


class SampleLoanGenerator(BaseGenerator):
    """Generate a user's complete state: PIN, loan terms and payment history."""

    INTEREST_RATES = [10, 15, 20, 25, 30]  # Percent over the whole loan
    DURATIONS_WEEKS = [24, 36, 52, 78, 104]

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        super().__init__(seed, locale)
        self.behavior = PaymentBehavior(self.rng)

    def generate(
        self,
        reference_date: date | None = None,
        profile: str | None = None,
    ) -> tuple[str, str, AppState]:
        """Generate one sample user.

        Parameters
        ----------
        reference_date : date | None
            "Today" for the payment history, defaults to ``date.today()``.
        profile : str | None
            Payer profile (see ``PaymentBehavior``), random when omitted.

        Returns
        -------
        tuple[str, str, AppState]
            User id, the raw PIN and the generated state.
        """
        if reference_date is None:
            reference_date = date.today()

        user_id = self.fake.uuid4()
        pin = self.fake.numerify("#" * self.rng.randint(4, 6))

        start = monday_of(
            self.fake.date_between(
                start_date=reference_date - timedelta(days=365),
                end_date=reference_date - timedelta(weeks=4),
            )
        )
        principal = Decimal(self.rng.randint(200, 1500) * 1000)
        rate = Decimal(self.rng.choice(self.INTEREST_RATES))
        total = principal + principal * rate / 100
        weeks = self.rng.choice(self.DURATIONS_WEEKS)
        weekly = Decimal(math.ceil(total / weeks / 1000) * 1000)

        mode = self.rng.choice(list(InterestInputType))
        if mode == InterestInputType.RATE:
            terms = from_interest_rate(principal, rate, weekly, start)
        else:
            terms = from_total_payable(principal, total, weekly, start)

        now = datetime.combine(reference_date, datetime.min.time())
        payments = initialize_schedule(terms, now)
        payments = self.behavior.apply(terms, payments, now, profile=profile)

        state = AppState(loan_terms=terms, payments=payments, pin_hash=hash_pin(pin))
        return user_id, pin, state
