from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class DirectoryLookup(Protocol):
    """Read-only view of the person directory.

    Eventually consistent with attendance state; no transactional coupling.
    """

    def list_persons(self) -> Sequence[Person]:
        raise NotImplementedError

    def get_person(self, identifier: str) -> Optional[Person]:
        raise NotImplementedError
