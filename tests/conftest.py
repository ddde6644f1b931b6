"""Pytest configuration and fixtures."""

from datetime import date, datetime

import pytest

from installment_tracker.finance import from_interest_rate
from installment_tracker.models import LoanTerms
from installment_tracker.store import MemoryStateStore
from installment_tracker.tracker import InstallmentTracker


@pytest.fixture
def loan_start() -> date:
    """A Monday."""
    return date(2024, 1, 1)


@pytest.fixture
def now() -> datetime:
    """Monday of the loan's fourth week, midday."""
    return datetime(2024, 1, 22, 12, 0)


@pytest.fixture
def loan_terms(loan_start: date) -> LoanTerms:
    """500 000 at 20% paid 25 000 a week: 600 000 over 24 weeks."""
    return from_interest_rate(500000, 20, 25000, loan_start)


@pytest.fixture
def memory_store(now: datetime) -> MemoryStateStore:
    return MemoryStateStore(clock=lambda: now)


@pytest.fixture
def tracker(memory_store: MemoryStateStore, now: datetime) -> InstallmentTracker:
    """Tracker on an empty in-memory store with a fixed clock."""
    return InstallmentTracker(memory_store, clock=lambda: now)


@pytest.fixture
def ready_tracker(tracker: InstallmentTracker) -> InstallmentTracker:
    """Tracker with a PIN and the standard loan already set up."""
    tracker.set_pin("1234", "1234")
    tracker.setup_loan(500000, 25000, date(2024, 1, 1), input_type="rate", interest_rate=20)
    return tracker
