from __future__ import annotations

import threading
from typing import Iterator, Optional, Sequence

from ..common.keyed_lock import KeyedLocks
from .model import LocationPosting
from .repository import Chooser, PostingRepository


class InMemoryPostingRepository(PostingRepository):
    def __init__(self):
        self._current: dict[str, LocationPosting] = {}
        self._history: dict[str, list[LocationPosting]] = {}
        self._index_lock = threading.Lock()
        self._key_locks = KeyedLocks()

    def submit(self, posting: LocationPosting, choose: Chooser) -> LocationPosting:
        with self._key_locks.hold(posting.identifier):
            chosen = choose(self.get_current(posting.identifier), posting)
            with self._index_lock:
                self._history.setdefault(posting.identifier, []).append(posting)
                self._current[posting.identifier] = chosen
            return chosen

    def get_current(self, identifier: str) -> Optional[LocationPosting]:
        with self._index_lock:
            return self._current.get(identifier)

    def iter_current(self) -> Iterator[LocationPosting]:
        with self._index_lock:
            snapshot = sorted(self._current.values(), key=lambda p: p.posted_at, reverse=True)
        yield from snapshot

    def recent(self, identifier: str, limit: int) -> Sequence[LocationPosting]:
        with self._index_lock:
            items = list(self._history.get(identifier, ()))
        items.sort(key=lambda p: p.posted_at, reverse=True)
        return items[: max(int(limit), 0)]
