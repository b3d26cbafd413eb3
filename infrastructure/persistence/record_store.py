"""Keyed record store for starters, feeding logs and recipes.

The calculators never touch the store; use cases read a record, compute
with the pure services and write the result back.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from enum import Enum
from typing import Dict, List, Optional, TypeVar, Union

from domain.models import FeedingLog, Recipe, RecordId, Starter

Record = Union[Starter, FeedingLog, Recipe]
R = TypeVar("R", Starter, FeedingLog, Recipe)


class RecordKind(Enum):
    STARTER = "starters"
    FEEDING_LOG = "feeding_logs"
    RECIPE = "recipes"

    @property
    def record_type(self) -> type:
        return _RECORD_TYPES[self]


_RECORD_TYPES = {
    RecordKind.STARTER: Starter,
    RecordKind.FEEDING_LOG: FeedingLog,
    RecordKind.RECIPE: Recipe,
}


class RecordStore(ABC):
    """Abstract record store interface."""

    @abstractmethod
    def get(self, kind: RecordKind, record_id: RecordId) -> Optional[Record]:
        """Get a record.

        Args:
            kind: Record kind
            record_id: Record ID

        Returns:
            The record or None if not found
        """

    @abstractmethod
    def put(self, kind: RecordKind, record: R) -> R:
        """Insert or replace a record.

        Args:
            kind: Record kind
            record: Record to store; an ID is assigned when it has none

        Returns:
            The stored record (with its ID)
        """

    @abstractmethod
    def delete(self, kind: RecordKind, record_id: RecordId) -> bool:
        """Delete a record.

        Returns:
            True if a record was removed
        """

    @abstractmethod
    def all(self, kind: RecordKind) -> List[Record]:
        """List every record of a kind in insertion order."""


def check_record_kind(kind: RecordKind, record: Record) -> None:
    if not isinstance(record, kind.record_type):
        raise TypeError(
            f"Cannot store {type(record).__name__} as {kind.value}"
        )


def next_record_id(existing: List[Record]) -> int:
    numeric = [r.id for r in existing if isinstance(r.id, int) and not isinstance(r.id, bool)]
    return max(numeric, default=0) + 1


class InMemoryRecordStore(RecordStore):
    """Thread-safe in-memory record store."""

    def __init__(self) -> None:
        self._records: Dict[RecordKind, Dict[RecordId, Record]] = {kind: {} for kind in RecordKind}
        self._lock = threading.Lock()

    def get(self, kind: RecordKind, record_id: RecordId) -> Optional[Record]:
        """Get a record."""
        with self._lock:
            return self._records[kind].get(record_id)

    def put(self, kind: RecordKind, record: R) -> R:
        """Insert or replace a record."""
        check_record_kind(kind, record)
        with self._lock:
            bucket = self._records[kind]
            if record.id is None:
                record = replace(record, id=next_record_id(list(bucket.values())))
            bucket[record.id] = record
            return record

    def delete(self, kind: RecordKind, record_id: RecordId) -> bool:
        """Delete a record."""
        with self._lock:
            return self._records[kind].pop(record_id, None) is not None

    def all(self, kind: RecordKind) -> List[Record]:
        """List every record of a kind."""
        with self._lock:
            return list(self._records[kind].values())

    def clear(self) -> None:
        """Remove all records."""
        with self._lock:
            for bucket in self._records.values():
                bucket.clear()
