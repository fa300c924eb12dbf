from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...core.enums import EventKind
from ..model import ClockEvent, DtrRecord


class ClockEventStrategy(ABC):
    """Strategy Pattern: how one kind of clock event folds into a day's record."""

    kind: EventKind

    def apply(self, record: Optional[DtrRecord], *, identifier: str, work_date: date, at: datetime) -> DtrRecord:
        current = record or DtrRecord(identifier=identifier, work_date=work_date)
        event = ClockEvent(kind=self.kind, at=at)
        if current.has_event(event):
            # exact resubmission (e.g. a client retry) is a no-op
            return current
        return self.derive(replace(current, events=current.events + (event,)), event)

    @abstractmethod
    def derive(self, record: DtrRecord, event: ClockEvent) -> DtrRecord:
        raise NotImplementedError
