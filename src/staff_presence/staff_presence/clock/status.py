from __future__ import annotations

from typing import Optional

from ..core.enums import PresenceStatus
from .model import DtrRecord


def derive_status(record: Optional[DtrRecord]) -> PresenceStatus:
    """Pure mapping from a day's record to a presence status."""
    if record is None:
        return PresenceStatus.NO_RECORD
    if record.first_in is None:
        return PresenceStatus.INCOMPLETE if record.last_out is not None else PresenceStatus.NO_RECORD
    if record.last_out is None or record.last_out < record.first_in:
        return PresenceStatus.IN_CAMPUS
    return PresenceStatus.PRESENT
