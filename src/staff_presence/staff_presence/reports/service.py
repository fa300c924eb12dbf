from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from ..clock.service import ClockLedgerService
from ..clock.status import derive_status
from ..common.datetime_utils import coerce_date
from ..core.constants import HOURS_PRECISION
from ..core.enums import PresenceStatus, RoleClass
from ..directory.repository import DirectoryLookup
from .calculator.base import WorkedHoursCalculator
from .calculator.standard_calculator import StandardWorkedHoursCalculator
from .model import DailySummary, PersonSummary

_HOURS_STEP = Decimal(1).scaleb(-HOURS_PRECISION)


def _round_hours(value: float) -> float:
    # half up: 4.25 -> 4.3
    return float(Decimal(str(value)).quantize(_HOURS_STEP, rounding=ROUND_HALF_UP))


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return _round_hours(sum(values) / len(values))


class AttendanceSummaryService:
    """Read-only aggregation over the clock ledger and the directory.

    Every call is an independent scan; nothing is cached between calls, so a
    dashboard may poll it on a fixed cadence.
    """

    def __init__(
        self,
        clock: ClockLedgerService,
        directory: DirectoryLookup,
        *,
        calculator: Optional[WorkedHoursCalculator] = None,
    ):
        self._clock = clock
        self._directory = directory
        self._calculator = calculator or StandardWorkedHoursCalculator()

    def summarize(self, work_date: Union[date, str]) -> DailySummary:
        work_date = coerce_date(work_date, "work_date")
        persons = list(self._directory.list_persons())
        records = {r.identifier: r for r in self._clock.records_for_date(work_date)}

        total_by_role = {role: 0 for role in RoleClass}
        status_counts = {status: 0 for status in PresenceStatus}
        hours: list[float] = []
        clocked_in = 0

        for person in persons:
            total_by_role[person.role_class] = total_by_role.get(person.role_class, 0) + 1
            record = records.get(person.identifier)
            status_counts[derive_status(record)] += 1
            if record is None:
                continue
            if record.first_in is not None:
                clocked_in += 1
            worked = self._calculator.worked_hours(record)
            if worked is not None:
                hours.append(worked)

        return DailySummary(
            work_date=work_date,
            total_by_role=total_by_role,
            average_worked_hours=_mean(hours),
            clocked_in_count=clocked_in,
            complete_count=len(hours),
            status_counts=status_counts,
        )

    def person_summary(
        self,
        identifier: str,
        *,
        start: Union[date, str],
        end: Union[date, str],
    ) -> PersonSummary:
        records = self._clock.history(identifier, start=start, end=end)
        start_date, end_date = sorted((coerce_date(start, "start"), coerce_date(end, "end")))

        hours = [h for h in (self._calculator.worked_hours(r) for r in records) if h is not None]
        return PersonSummary(
            identifier=identifier.strip(),
            start_date=start_date,
            end_date=end_date,
            days_recorded=len(records),
            days_complete=len(hours),
            total_hours=_round_hours(sum(hours)),
            average_hours=_mean(hours),
        )
