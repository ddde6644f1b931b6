"""Sample data generators."""

from installment_tracker.generators.payments import PROFILES, PaymentBehavior
from installment_tracker.generators.sample import SampleLoanGenerator

__all__ = ["PROFILES", "PaymentBehavior", "SampleLoanGenerator"]
