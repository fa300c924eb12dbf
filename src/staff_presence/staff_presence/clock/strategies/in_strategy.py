from __future__ import annotations

from dataclasses import replace

from ...core.enums import EventKind
from ..model import ClockEvent, DtrRecord
from .base import ClockEventStrategy


class ClockInStrategy(ClockEventStrategy):
    """First in wins: ``first_in`` only ever moves to an earlier timestamp."""

    kind = EventKind.IN

    def derive(self, record: DtrRecord, event: ClockEvent) -> DtrRecord:
        if record.first_in is None or event.at < record.first_in:
            return replace(record, first_in=event.at)
        return record
