from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..core.enums import PresenceStatus, RoleClass


@dataclass(frozen=True)
class DailySummary:
    work_date: date
    total_by_role: dict[RoleClass, int]
    average_worked_hours: float
    clocked_in_count: int = 0
    complete_count: int = 0
    status_counts: dict[PresenceStatus, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PersonSummary:
    identifier: str
    start_date: date
    end_date: date
    days_recorded: int
    days_complete: int
    total_hours: float
    average_hours: float
