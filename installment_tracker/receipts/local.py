"""Local directory receipt store."""

import logging
import time
import uuid
from datetime import date
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from installment_tracker.exceptions import ReceiptError
from installment_tracker.models import InlineReceipt, ReceiptImage, RemoteReceipt
from installment_tracker.receipts.base import MAX_RECEIPT_BYTES, ReceiptStore
from installment_tracker.weeks import iso_date

logger = logging.getLogger(__name__)

RECEIPT_DIR = "receipts"


class LocalReceiptStore(ReceiptStore):
    """Write receipts under ``<directory>/receipts`` and reference them by file URL."""

    def __init__(self, directory: str | Path, max_bytes: int = MAX_RECEIPT_BYTES) -> None:
        super().__init__(max_bytes)
        self.directory = Path(directory).resolve()

    def upload(self, image: bytes, week_start: date, content_type: str) -> ReceiptImage:
        self.validate(image, week_start, content_type)

        extension = content_type.split("/", 1)[1]
        filename = f"{iso_date(week_start)}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{extension}"
        path = self.directory / RECEIPT_DIR / filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(image)
        except OSError as e:
            raise ReceiptError(f"Failed to upload receipt: {e}") from e

        logger.info("Stored receipt for week %s at %s", iso_date(week_start), path)
        return RemoteReceipt(path.as_uri())

    def delete(self, receipt: ReceiptImage) -> bool:
        if receipt is None or isinstance(receipt, InlineReceipt):
            return True

        path = self._path_for(receipt)
        if path is None:
            logger.warning("Receipt %s is not held by this store, leaving it", receipt.url)
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Receipt file %s already gone", path)
            return False
        except OSError as e:
            raise ReceiptError(f"Failed to delete receipt: {e}") from e
        return True

    def _path_for(self, receipt: RemoteReceipt) -> Path | None:
        parsed = urlparse(receipt.url)
        if parsed.scheme != "file":
            return None
        path = Path(url2pathname(parsed.path)).resolve()
        if (self.directory / RECEIPT_DIR) not in path.parents:
            return None
        return path
