"""In-memory state store."""

import copy
from datetime import datetime
from typing import Callable

from installment_tracker.exceptions import StorageError
from installment_tracker.models import AppState
from installment_tracker.serialization import state_from_dict, state_to_dict
from installment_tracker.store.base import StateStore


class MemoryStateStore(StateStore):
    """Keep the serialized document in memory.

    The state goes through the same document form as the persistent stores,
    so a loaded state never shares objects with a saved one.
    """

    def __init__(self, document: dict | None = None, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(clock)
        self.document = copy.deepcopy(document)
        self.save_count = 0

    def load(self) -> AppState | None:
        try:
            return state_from_dict(copy.deepcopy(self.document))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Stored document is invalid: {e}") from e

    def save(self, state: AppState) -> None:
        self.document = state_to_dict(state)
        self.save_count += 1

    def clear(self) -> None:
        self.document = None
