"""JSON file state store, one document per user."""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable

from installment_tracker.exceptions import StorageError
from installment_tracker.models import AppState
from installment_tracker.serialization import state_from_dict, state_to_dict
from installment_tracker.store.base import StateStore

logger = logging.getLogger(__name__)

DOCUMENT_DIR = "app-data"


class JsonFileStateStore(StateStore):
    """Store each user's state at ``<base_dir>/app-data/<user_id>.json``."""

    def __init__(
        self,
        base_dir: str | Path,
        user_id: str,
        pretty: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        base_dir : str | Path
            Root data directory; created on first save.
        user_id : str
            Opaque id naming the user's document.
        pretty : bool
            Pretty-print JSON output.
        clock : Callable[[], datetime] | None
            Source of "now" for recalculation.
        """
        super().__init__(clock)
        if not user_id:
            raise StorageError("User ID required")
        self.base_dir = Path(base_dir)
        self.user_id = user_id
        self.pretty = pretty

    @property
    def path(self) -> Path:
        return self.base_dir / DOCUMENT_DIR / f"{self.user_id}.json"

    def load(self) -> AppState | None:
        if not self.path.exists():
            logger.debug("No document at %s", self.path)
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return state_from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Failed to fetch data from {self.path}: {e}") from e

    def save(self, state: AppState) -> None:
        data = state_to_dict(state)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.user_id}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    if self.pretty:
                        json.dump(data, f, indent=2, ensure_ascii=False)
                    else:
                        json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to save data to {self.path}: {e}") from e
        logger.debug("Saved %d payments to %s", len(state.payments), self.path, extra={"user_id": self.user_id})

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete data at {self.path}: {e}") from e
