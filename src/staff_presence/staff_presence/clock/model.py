from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EventKind, PresenceStatus


@dataclass(frozen=True)
class ClockEvent:
    kind: EventKind
    at: datetime


@dataclass(frozen=True)
class DtrRecord:
    """Daily Time Record: one per (identifier, work_date).

    ``events`` is append-only and kept in arrival order; ``first_in`` and
    ``last_out`` are derived from event timestamps, not from arrival order.
    """

    identifier: str
    work_date: date
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    events: tuple[ClockEvent, ...] = ()

    @property
    def event_log(self) -> list[ClockEvent]:
        """Events in timestamp order (ties: ``in`` before ``out``)."""
        return sorted(self.events, key=lambda e: (e.at, e.kind != EventKind.IN))

    def has_event(self, event: ClockEvent) -> bool:
        return event in self.events


@dataclass(frozen=True)
class ClockResult:
    record: DtrRecord
    status: PresenceStatus
