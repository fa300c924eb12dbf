from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Person
from .repository import DirectoryLookup


class InMemoryDirectory(DirectoryLookup):
    def __init__(self, persons: Iterable[Person] = ()):
        self._persons: dict[str, Person] = {p.identifier: p for p in persons}

    def list_persons(self) -> Sequence[Person]:
        return list(self._persons.values())

    def get_person(self, identifier: str) -> Optional[Person]:
        return self._persons.get(identifier)
