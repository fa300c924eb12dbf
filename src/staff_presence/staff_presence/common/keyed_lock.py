from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


class KeyedLocks:
    """One mutex per key, created on first use and dropped once nobody holds
    or waits for it.

    Holding the lock for one key never blocks another key; the registry lock is
    only held while looking the key's mutex up or releasing it.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._entries)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[key]
