"""Base class for whole-document state stores."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable

from installment_tracker.models import AppState
from installment_tracker.status import recalculate_all

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Persistence for one user's ``AppState``.

    The state is always read and written as a whole document; there is no
    partial update and no locking, so concurrent writers race and the last
    write wins.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of "now" for the recalculation done by ``delete_payment``.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or datetime.now

    @abstractmethod
    def load(self) -> AppState | None:
        """Return the stored state, or ``None`` when nothing was saved yet.

        Raises
        ------
        StorageError
            If the document exists but cannot be read.
        """

    @abstractmethod
    def save(self, state: AppState) -> None:
        """Replace the stored document with ``state``.

        Raises
        ------
        StorageError
            If the document cannot be written.
        """

    @abstractmethod
    def clear(self) -> None:
        """Delete the stored document. Deleting nothing is not an error."""

    def delete_payment(self, week_start: date, now: datetime | None = None) -> bool:
        """Remove the record for one week and save the recalculated set.

        Parameters
        ----------
        week_start : date
            Monday of the week to remove.
        now : datetime | None
            Moment for the recalculation, defaults to the store's clock.

        Returns
        -------
        bool
            ``True`` if a record was removed.
        """
        state = self.load()
        if state is None:
            return False

        remaining = [p for p in state.payments if p.week_start_date != week_start]
        if len(remaining) == len(state.payments):
            return False

        state.payments = recalculate_all(remaining, now or self.clock())
        self.save(state)
        week = week_start.isoformat()
        logger.debug("Removed week %s from the document", week, extra={"week": week})
        return True
