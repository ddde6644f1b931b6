"""Domain models for installment tracking."""

from installment_tracker.models.enums import InterestInputType, OnboardingStage, PaymentStatus
from installment_tracker.models.loan import LoanTerms, WeeklyPayment
from installment_tracker.models.receipt import InlineReceipt, ReceiptImage, RemoteReceipt
from installment_tracker.models.state import AppState, LoanMetrics

__all__ = [
    "AppState",
    "InlineReceipt",
    "InterestInputType",
    "LoanMetrics",
    "LoanTerms",
    "OnboardingStage",
    "PaymentStatus",
    "ReceiptImage",
    "RemoteReceipt",
    "WeeklyPayment",
]
