from __future__ import annotations

from typing import Callable, Iterator, Optional, Protocol, Sequence

from .model import LocationPosting

Chooser = Callable[[Optional[LocationPosting], LocationPosting], LocationPosting]


class PostingRepository(Protocol):
    """Storage for location postings keyed by identifier.

    ``submit`` must be atomic per identifier: it records the submission in the
    history and stores ``choose(current, submitted)`` as the canonical posting.
    """

    def submit(self, posting: LocationPosting, choose: Chooser) -> LocationPosting:
        raise NotImplementedError

    def get_current(self, identifier: str) -> Optional[LocationPosting]:
        raise NotImplementedError

    def iter_current(self) -> Iterator[LocationPosting]:
        raise NotImplementedError

    def recent(self, identifier: str, limit: int) -> Sequence[LocationPosting]:
        """Latest submissions for ``identifier``, newest ``posted_at`` first."""
        raise NotImplementedError
