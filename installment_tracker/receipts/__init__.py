"""Receipt image stores."""

from installment_tracker.receipts.base import ALLOWED_CONTENT_TYPES, MAX_RECEIPT_BYTES, ReceiptStore
from installment_tracker.receipts.inline import InlineReceiptStore
from installment_tracker.receipts.local import LocalReceiptStore

__all__ = [
    "ALLOWED_CONTENT_TYPES",
    "InlineReceiptStore",
    "LocalReceiptStore",
    "MAX_RECEIPT_BYTES",
    "ReceiptStore",
]
