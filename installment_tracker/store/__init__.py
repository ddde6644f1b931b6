"""Whole-document state stores."""

from installment_tracker.store.base import StateStore
from installment_tracker.store.json_file import JsonFileStateStore
from installment_tracker.store.memory import MemoryStateStore
from installment_tracker.store.postgres import PostgresStateStore

__all__ = ["JsonFileStateStore", "MemoryStateStore", "PostgresStateStore", "StateStore"]
