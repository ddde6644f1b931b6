"""Receipt image references.

A stored receipt is either a reference to an object held by a receipt store
(``RemoteReceipt``) or the image itself encoded inline (``InlineReceipt``),
the fallback used when no file storage backend is available. An absent
receipt is ``None``.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class RemoteReceipt:
    """Receipt held by a receipt store, addressed by URL."""

    url: str


@dataclass(frozen=True)
class InlineReceipt:
    """Receipt embedded in the document (data URL or bare base64)."""

    data: str

    @property
    def content_type(self) -> str | None:
        """MIME type declared by a data URL, if any."""
        if not self.data.startswith("data:"):
            return None
        header = self.data[5:].split(",", 1)[0]
        return header.split(";", 1)[0] or None


ReceiptImage = Union[RemoteReceipt, InlineReceipt, None]
