"""PostgreSQL state store keeping one JSONB document per user."""

import logging
from datetime import datetime
from typing import Callable

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from installment_tracker.exceptions import StorageError
from installment_tracker.models import AppState
from installment_tracker.serialization import state_from_dict, state_to_dict
from installment_tracker.store.base import StateStore

logger = logging.getLogger(__name__)


class PostgresStateStore(StateStore):
    """Store each user's state as a row of ``(user_id, data jsonb)``.

    A connection is opened per operation; saves are upserts, so the row is
    replaced as a whole.
    """

    def __init__(
        self,
        conninfo: str,
        user_id: str,
        table: str = "app_data",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(clock)
        if not user_id:
            raise StorageError("User ID required")
        self.conninfo = conninfo
        self.user_id = user_id
        self.table = table

    def ensure_schema(self) -> None:
        """Create the document table if it does not exist."""
        query = sql.SQL(
            "CREATE TABLE IF NOT EXISTS {} ("
            "user_id TEXT PRIMARY KEY, "
            "data JSONB NOT NULL, "
            "updated_at TIMESTAMPTZ NOT NULL DEFAULT now())"
        ).format(sql.Identifier(self.table))
        self._execute(query, (), "create table")

    def load(self) -> AppState | None:
        query = sql.SQL("SELECT data FROM {} WHERE user_id = %s").format(sql.Identifier(self.table))
        try:
            with psycopg.connect(self.conninfo) as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (self.user_id,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise StorageError(f"Failed to fetch data: {e}") from e

        if row is None:
            return None
        try:
            return state_from_dict(row[0])
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Stored document for {self.user_id} is invalid: {e}") from e

    def save(self, state: AppState) -> None:
        query = sql.SQL(
            "INSERT INTO {} (user_id, data, updated_at) VALUES (%s, %s, now()) "
            "ON CONFLICT (user_id) DO UPDATE SET data = EXCLUDED.data, updated_at = EXCLUDED.updated_at"
        ).format(sql.Identifier(self.table))
        self._execute(query, (self.user_id, Jsonb(state_to_dict(state))), "save data")
        logger.debug("Saved %d payments", len(state.payments), extra={"user_id": self.user_id})

    def clear(self) -> None:
        query = sql.SQL("DELETE FROM {} WHERE user_id = %s").format(sql.Identifier(self.table))
        self._execute(query, (self.user_id,), "delete data")

    def _execute(self, query: sql.Composed, params: tuple, action: str) -> None:
        try:
            with psycopg.connect(self.conninfo) as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
        except psycopg.Error as e:
            raise StorageError(f"Failed to {action}: {e}") from e
