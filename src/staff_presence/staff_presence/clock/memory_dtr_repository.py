from __future__ import annotations

import threading
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.keyed_lock import KeyedLocks
from .model import DtrRecord
from .repository import DtrRepository


class InMemoryDtrRepository(DtrRepository):
    """Process-local store with a mutex per (identifier, work_date)."""

    def __init__(self):
        self._records: dict[tuple[str, date], DtrRecord] = {}
        self._index_lock = threading.Lock()
        self._key_locks = KeyedLocks()

    def get(self, identifier: str, work_date: date) -> Optional[DtrRecord]:
        with self._index_lock:
            return self._records.get((identifier, work_date))

    def list_for_date(self, work_date: date) -> Sequence[DtrRecord]:
        with self._index_lock:
            items = [r for (_, d), r in self._records.items() if d == work_date]
        items.sort(key=lambda r: r.identifier)
        return items

    def list_for_identifier(self, identifier: str, *, start_date: date, end_date: date) -> Sequence[DtrRecord]:
        with self._index_lock:
            items = [
                r for (ident, d), r in self._records.items() if ident == identifier and start_date <= d <= end_date
            ]
        items.sort(key=lambda r: r.work_date)
        return items

    def mutate(
        self,
        identifier: str,
        work_date: date,
        fn: Callable[[Optional[DtrRecord]], DtrRecord],
    ) -> DtrRecord:
        key = (identifier, work_date)
        with self._key_locks.hold(key):
            updated = fn(self.get(identifier, work_date))
            with self._index_lock:
                self._records[key] = updated
            return updated
