"""Custom exception hierarchy for installment-tracker."""


class TrackerError(Exception):
    """Base exception for all installment-tracker errors."""


class ValidationError(TrackerError):
    """Raised when user input fails validation.

    Parameters
    ----------
    message : str
        User-facing message.
    field : str | None
        Name of the offending input, if any.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class LoanNotConfiguredError(TrackerError):
    """Raised when an operation needs loan terms that have not been set up."""


class PaymentNotFoundError(TrackerError):
    """Raised when no payment record exists for the requested week."""


class StorageError(TrackerError):
    """Raised when a state store operation fails."""


class ReceiptError(TrackerError):
    """Raised when a receipt cannot be validated, uploaded or deleted."""


class ConfigurationError(TrackerError):
    """Raised when configuration is invalid or missing."""
