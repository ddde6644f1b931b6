"""Inline receipt store: the image travels inside the document."""

import base64
from datetime import date

from installment_tracker.models import InlineReceipt, ReceiptImage
from installment_tracker.receipts.base import ReceiptStore


class InlineReceiptStore(ReceiptStore):
    """Encode receipts as ``data:`` URLs; used when no file storage exists."""

    def upload(self, image: bytes, week_start: date, content_type: str) -> ReceiptImage:
        self.validate(image, week_start, content_type)
        encoded = base64.b64encode(image).decode("ascii")
        return InlineReceipt(f"data:{content_type};base64,{encoded}")

    def delete(self, receipt: ReceiptImage) -> bool:
        # Inline images vanish with the payment record.
        return True


def decode_inline(receipt: InlineReceipt) -> bytes:
    """Return the raw image bytes of an inline receipt."""
    payload = receipt.data.split(",", 1)[1] if receipt.data.startswith("data:") else receipt.data
    return base64.b64decode(payload)
