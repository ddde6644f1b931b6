"""Base class for receipt image stores."""

from abc import ABC, abstractmethod
from datetime import date

from installment_tracker.exceptions import ReceiptError
from installment_tracker.models import ReceiptImage

ALLOWED_CONTENT_TYPES = ("image/png", "image/jpeg", "image/jpg")
MAX_RECEIPT_BYTES = 5 * 1024 * 1024


class ReceiptStore(ABC):
    """Store receipt images and hand back a reference to keep on the payment.

    Parameters
    ----------
    max_bytes : int
        Largest accepted image.
    """

    def __init__(self, max_bytes: int = MAX_RECEIPT_BYTES) -> None:
        self.max_bytes = max_bytes

    def validate(self, image: bytes, week_start: date | None, content_type: str) -> None:
        """Check an upload before storing it.

        Raises
        ------
        ReceiptError
            If the image is empty, too large, of an unsupported type, or has
            no week to belong to.
        """
        if not image:
            raise ReceiptError("No file provided")
        if week_start is None:
            raise ReceiptError("No weekStartDate provided")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ReceiptError("Invalid file type. Only PNG/JPEG allowed")
        if len(image) > self.max_bytes:
            raise ReceiptError(f"File too large. Max {self.max_bytes // (1024 * 1024)}MB")

    @abstractmethod
    def upload(self, image: bytes, week_start: date, content_type: str) -> ReceiptImage:
        """Store ``image`` for the given week and return its reference."""

    @abstractmethod
    def delete(self, receipt: ReceiptImage) -> bool:
        """Delete a stored receipt; ``True`` when nothing is left behind."""
