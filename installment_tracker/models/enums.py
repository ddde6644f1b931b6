"""Enumeration types for installment tracking."""

from enum import Enum


class PaymentStatus(str, Enum):
    PAID = "PAID"
    MISSED = "MISSED"
    UPCOMING = "UPCOMING"


class InterestInputType(str, Enum):
    """How the loan's cost is entered at setup."""

    RATE = "rate"
    TOTAL = "total"


class OnboardingStage(str, Enum):
    """Which step a user still has to complete before tracking payments."""

    PIN = "PIN"
    LOAN = "LOAN"
    READY = "READY"
