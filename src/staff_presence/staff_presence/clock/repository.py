from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence

from .model import DtrRecord


class DtrRepository(Protocol):
    """Storage for DTR records.

    ``mutate`` is the only write path and must be atomic per
    ``(identifier, work_date)``: concurrent callers on the same key are
    serialized, callers on different keys never wait on each other.
    Implementations raise ConflictError when a collision was detected and the
    whole mutation may be retried, StorageUnavailableError on outages.
    """

    def get(self, identifier: str, work_date: date) -> Optional[DtrRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[DtrRecord]:
        raise NotImplementedError

    def list_for_identifier(self, identifier: str, *, start_date: date, end_date: date) -> Sequence[DtrRecord]:
        raise NotImplementedError

    def mutate(
        self,
        identifier: str,
        work_date: date,
        fn: Callable[[Optional[DtrRecord]], DtrRecord],
    ) -> DtrRecord:
        raise NotImplementedError
