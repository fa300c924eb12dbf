from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Sequence, Union

from ..common.datetime_utils import coerce_date, local_date, normalize_timestamp
from ..common.logger import get_logger
from ..common.retry import RetryPolicy
from ..common.validators import require_non_empty
from ..core.enums import EventKind, PresenceStatus
from .factory import ClockStrategyFactory
from .model import ClockResult, DtrRecord
from .repository import DtrRepository
from .status import derive_status

logger = get_logger(__name__)

Timestamp = Union[datetime, str, None]


class ClockLedgerService:
    """Use case: clock in / clock out against the per-person-per-day DTR."""

    def __init__(
        self,
        records: DtrRepository,
        *,
        strategy_factory: Optional[ClockStrategyFactory] = None,
        retry_policy: Optional[RetryPolicy] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._records = records
        self._factory = strategy_factory or ClockStrategyFactory()
        self._retry = retry_policy or RetryPolicy()
        self._tz = tz

    def clock_in(self, identifier: str, at: Timestamp = None) -> ClockResult:
        return self._clock(EventKind.IN, identifier, at)

    def clock_out(self, identifier: str, at: Timestamp = None) -> ClockResult:
        return self._clock(EventKind.OUT, identifier, at)

    def get_record(self, identifier: str, work_date: Union[date, str]) -> Optional[DtrRecord]:
        identifier = require_non_empty(identifier, "identifier")
        return self._records.get(identifier, coerce_date(work_date, "work_date"))

    def get_status(self, identifier: str, work_date: Union[date, str]) -> PresenceStatus:
        return derive_status(self.get_record(identifier, work_date))

    @staticmethod
    def derive_status(record: Optional[DtrRecord]) -> PresenceStatus:
        return derive_status(record)

    def records_for_date(self, work_date: Union[date, str]) -> Sequence[DtrRecord]:
        return self._records.list_for_date(coerce_date(work_date, "work_date"))

    def history(
        self,
        identifier: str,
        *,
        start: Union[date, str],
        end: Union[date, str],
    ) -> Sequence[DtrRecord]:
        identifier = require_non_empty(identifier, "identifier")
        start_date = coerce_date(start, "start")
        end_date = coerce_date(end, "end")
        if end_date < start_date:
            start_date, end_date = end_date, start_date
        return self._records.list_for_identifier(identifier, start_date=start_date, end_date=end_date)

    def _clock(self, kind: EventKind, identifier: str, at: Timestamp) -> ClockResult:
        # validate before touching storage
        identifier = require_non_empty(identifier, "identifier")
        at = self._normalize(at)
        work_date = local_date(at, self._tz)
        strategy = self._factory.for_kind(kind)

        def _apply(current: Optional[DtrRecord]) -> DtrRecord:
            return strategy.apply(current, identifier=identifier, work_date=work_date, at=at)

        record = self._retry.run(
            lambda: self._records.mutate(identifier, work_date, _apply),
            operation=f"clock {kind.value}",
        )
        status = derive_status(record)
        logger.info("Clock %s: %s at %s (%s, %s)", kind.value, identifier, at.isoformat(), work_date, status.value)
        return ClockResult(record=record, status=status)

    def _normalize(self, at: Timestamp) -> datetime:
        return normalize_timestamp(at, self._tz, "at")
