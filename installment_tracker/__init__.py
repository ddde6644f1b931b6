"""Weekly car-loan installment tracking."""

from installment_tracker.tracker import InstallmentTracker

__version__ = "0.1.0"

__all__ = ["InstallmentTracker", "__version__"]
