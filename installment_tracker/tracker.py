"""Application service tying the calculators to storage.

Every operation follows the same read-modify-write cycle: load the whole
state, apply one change, recalculate statuses, save the whole state back.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from installment_tracker import finance, pin
from installment_tracker.config import TrackerConfig
from installment_tracker.exceptions import (
    LoanNotConfiguredError,
    PaymentNotFoundError,
    ReceiptError,
    StorageError,
)
from installment_tracker.models import (
    AppState,
    InterestInputType,
    LoanMetrics,
    OnboardingStage,
    ReceiptImage,
    WeeklyPayment,
)
from installment_tracker.receipts import InlineReceiptStore, LocalReceiptStore, ReceiptStore
from installment_tracker.schedule import initialize_schedule
from installment_tracker.status import classify_status, recalculate_all
from installment_tracker.store import JsonFileStateStore, MemoryStateStore, PostgresStateStore, StateStore
from installment_tracker.validation import validate_loan_inputs, validate_payment_amount
from installment_tracker.weeks import iso_date, monday_of, week_end

logger = logging.getLogger(__name__)

# Marks an omitted receipt argument; None means "no receipt".
_KEEP_RECEIPT = object()


class InstallmentTracker:
    """Track weekly installments for one user's loan.

    Parameters
    ----------
    store : StateStore
        Where the user's state document lives.
    receipts : ReceiptStore | None
        Where receipt images go; defaults to inline encoding.
    clock : Callable[[], datetime] | None
        Source of "now", defaults to ``datetime.now``.
    """

    def __init__(
        self,
        store: StateStore,
        receipts: ReceiptStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.receipts = receipts or InlineReceiptStore()
        self.clock = clock or datetime.now

    @classmethod
    def from_config(cls, config: TrackerConfig) -> InstallmentTracker:
        """Build a tracker with the stores named by ``config``."""
        config.validate()

        store: StateStore
        if config.storage.backend == "postgres":
            store = PostgresStateStore(
                config.postgres.connection_string,
                config.user_id,
                table=config.postgres.table,
            )
        elif config.storage.backend == "json":
            store = JsonFileStateStore(config.storage.data_dir, config.user_id, pretty=config.storage.pretty_json)
        else:
            store = MemoryStateStore()

        receipts: ReceiptStore
        if config.receipts.backend == "local":
            receipts = LocalReceiptStore(config.receipts.receipt_dir, max_bytes=config.receipts.max_bytes)
        else:
            receipts = InlineReceiptStore(max_bytes=config.receipts.max_bytes)

        return cls(store, receipts)

    def load(self) -> AppState | None:
        """Load the state, bringing the schedule up to date.

        Builds the schedule if loan terms exist without payments, then
        recalculates every status. The document is saved back only if
        that changed it.

        Returns
        -------
        AppState | None
            Current state, ``None`` for a user with nothing stored.
        """
        state = self.store.load()
        if state is None:
            return None
        if state.loan_terms is None:
            return state

        now = self.clock()
        payments = state.payments
        if not payments:
            logger.info("Initializing %d weeks of payments", state.loan_terms.loan_duration_weeks)
            payments = initialize_schedule(state.loan_terms, now)

        payments = recalculate_all(payments, now)
        if payments != state.payments:
            state.payments = payments
            self.store.save(state)
        return state

    def stage(self) -> OnboardingStage:
        """Get the onboarding step the user has reached.

        A storage failure is logged and treated as a fresh start so the
        user can still onboard.
        """
        try:
            state = self.store.load()
        except StorageError:
            logger.exception("Failed to load data, falling back to onboarding")
            return OnboardingStage.PIN

        if state is None or not state.pin_hash:
            return OnboardingStage.PIN
        if state.loan_terms is None:
            return OnboardingStage.LOAN
        return OnboardingStage.READY

    def set_pin(self, new_pin: str, confirmation: str | None = None) -> None:
        """Validate and store a new PIN.

        Raises
        ------
        ValidationError
            If the PIN is not 4-6 digits or the confirmation differs.
        """
        digest = pin.new_pin_hash(new_pin, confirmation)
        state = self.store.load() or AppState()
        state.pin_hash = digest
        self.store.save(state)
        logger.info("PIN updated")

    def check_pin(self, candidate: str) -> bool:
        """Check a PIN against the stored digest; ``False`` if none is set."""
        state = self.store.load()
        if state is None or not state.pin_hash:
            return False
        return pin.verify_pin(candidate, state.pin_hash)

    def setup_loan(
        self,
        principal: Decimal | int | float | str | None,
        weekly_installment: Decimal | int | float | str | None,
        loan_start_date: date | datetime | str | None,
        input_type: InterestInputType | str = InterestInputType.RATE,
        interest_rate: Decimal | int | float | str | None = None,
        total_payable: Decimal | int | float | str | None = None,
    ) -> AppState:
        """Set up (or redo) the loan and build a fresh payment schedule.

        The start date is moved back to the Monday of its week. Existing
        payment records are replaced.

        Raises
        ------
        ValidationError
            If any input is invalid.
        """
        values = validate_loan_inputs(
            principal,
            weekly_installment,
            loan_start_date,
            input_type=input_type,
            interest_rate=interest_rate,
            total_payable=total_payable,
        )
        start = monday_of(values["loan_start_date"])

        if values["input_type"] == InterestInputType.RATE:
            terms = finance.from_interest_rate(
                values["principal"], values["interest_rate"], values["weekly_installment"], start
            )
        else:
            terms = finance.from_total_payable(
                values["principal"], values["total_payable"], values["weekly_installment"], start
            )

        state = self.store.load() or AppState()
        state.loan_terms = terms
        state.payments = initialize_schedule(terms, self.clock())
        self.store.save(state)

        logger.info(
            "Loan set up: total payable %s over %d weeks from %s",
            terms.total_payable,
            terms.loan_duration_weeks,
            iso_date(start),
        )
        return state

    def record_payment(
        self,
        week_start: date,
        amount: Decimal | int | float | str | None,
        payment_date: date | None = None,
        receipt: ReceiptImage | object = _KEEP_RECEIPT,
        mark_paid: bool = True,
    ) -> WeeklyPayment:
        """Create or update the payment record for one week.

        Parameters
        ----------
        week_start : date
            Any day of the week; normalized to its Monday.
        amount : Decimal | int | float | str | None
            Amount paid; must be positive.
        payment_date : date | None
            Day paid, defaults to the week's Monday; normalized to its Monday.
        receipt : ReceiptImage
            Receipt reference, see ``attach_receipt``. When omitted the week's
            current receipt is kept; ``None`` detaches it.
        mark_paid : bool
            ``False`` stores the amount without a payment date, leaving the
            week unpaid.

        Returns
        -------
        WeeklyPayment
            The saved record.
        """
        value = validate_payment_amount(amount)
        state = self._load_configured()
        monday = monday_of(week_start)

        existing = state.find_payment(monday)
        previous = existing.receipt_image if existing else None
        if receipt is _KEEP_RECEIPT:
            receipt = previous

        paid_on = monday_of(payment_date or monday) if mark_paid else None
        record = WeeklyPayment(
            week_start_date=monday,
            week_end_date=week_end(monday),
            payment_date=paid_on,
            amount_paid=value,
            receipt_image=receipt,
            status=classify_status(paid_on, week_end(monday), self.clock()),
        )

        self._upsert(state, record)
        self.store.save(state)
        if previous is not None and previous != receipt:
            self._discard_receipt(previous)
        logger.info(
            "Recorded %s for week %s",
            value,
            iso_date(monday),
            extra={"week": iso_date(monday), "amount": value, "status": record.status.value},
        )
        return record

    def attach_receipt(self, week_start: date, image: bytes, content_type: str) -> WeeklyPayment:
        """Upload a receipt for an existing week, replacing any earlier one.

        Raises
        ------
        PaymentNotFoundError
            If there is no record for the week.
        ReceiptError
            If the upload is rejected.
        """
        state = self._load_configured()
        monday = monday_of(week_start)
        current = state.find_payment(monday)
        if current is None:
            raise PaymentNotFoundError(f"No payment for week {iso_date(monday)}")

        receipt = self.receipts.upload(image, monday, content_type)
        updated = replace(current, receipt_image=receipt)
        self._upsert(state, updated)
        self.store.save(state)

        logger.info("Attached receipt for week %s", iso_date(monday), extra={"week": iso_date(monday)})

        if current.receipt_image is not None:
            self._discard_receipt(current.receipt_image)
        return updated

    def remove_receipt(self, week_start: date) -> WeeklyPayment:
        """Detach and delete the receipt of one week."""
        state = self._load_configured()
        monday = monday_of(week_start)
        current = state.find_payment(monday)
        if current is None:
            raise PaymentNotFoundError(f"No payment for week {iso_date(monday)}")

        updated = replace(current, receipt_image=None)
        self._upsert(state, updated)
        self.store.save(state)
        self._discard_receipt(current.receipt_image)
        return updated

    def delete_payment(self, week_start: date) -> None:
        """Delete the record for one week along with its receipt.

        Raises
        ------
        PaymentNotFoundError
            If there is no record for the week.
        """
        monday = monday_of(week_start)
        state = self.store.load()
        current = state.find_payment(monday) if state else None
        if current is None:
            raise PaymentNotFoundError(f"No payment for week {iso_date(monday)}")

        self.store.delete_payment(monday, now=self.clock())
        logger.info("Deleted payment for week %s", iso_date(monday), extra={"week": iso_date(monday)})
        self._discard_receipt(current.receipt_image)

    def metrics(self) -> LoanMetrics:
        """Compute dashboard figures from freshly recalculated statuses."""
        state = self._load_configured()
        return finance.compute_metrics(state.loan_terms, recalculate_all(state.payments, self.clock()))

    def reset(self) -> None:
        """Delete everything stored for the user, receipts included."""
        state = self.store.load()
        if state is not None:
            for payment in state.payments:
                self._discard_receipt(payment.receipt_image)
        self.store.clear()
        logger.info("All data cleared")

    def _load_configured(self) -> AppState:
        state = self.load()
        if state is None or state.loan_terms is None:
            raise LoanNotConfiguredError("Loan details have not been set up")
        return state

    def _upsert(self, state: AppState, record: WeeklyPayment) -> None:
        for i, payment in enumerate(state.payments):
            if payment.week_start_date == record.week_start_date:
                state.payments[i] = record
                return
        state.payments.append(record)
        state.payments.sort(key=lambda p: p.week_start_date)

    def _discard_receipt(self, receipt: ReceiptImage) -> None:
        if receipt is None:
            return
        try:
            if not self.receipts.delete(receipt):
                logger.warning("Receipt was not deleted")
        except ReceiptError:
            logger.exception("Failed to delete receipt")

