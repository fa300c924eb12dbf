from __future__ import annotations

from dataclasses import replace

from ...core.enums import EventKind
from ..model import ClockEvent, DtrRecord
from .base import ClockEventStrategy


class ClockOutStrategy(ClockEventStrategy):
    """Last out wins by timestamp; a late-arriving older ``out`` is only logged."""

    kind = EventKind.OUT

    def derive(self, record: DtrRecord, event: ClockEvent) -> DtrRecord:
        if record.last_out is None or event.at > record.last_out:
            return replace(record, last_out=event.at)
        return record
