from __future__ import annotations

from typing import Optional

from ...clock.model import DtrRecord
from ...common.datetime_utils import hours_between
from ...common.logger import get_logger
from .base import WorkedHoursCalculator

logger = get_logger(__name__)


class StandardWorkedHoursCalculator(WorkedHoursCalculator):
    """Standard rule: last_out - first_in; non-positive spans are discarded."""

    def worked_hours(self, record: DtrRecord) -> Optional[float]:
        if record.first_in is None or record.last_out is None:
            return None
        hours = hours_between(record.first_in, record.last_out)
        if hours <= 0:
            logger.debug("Discarding %s on %s: out %s not after in %s",
                         record.identifier, record.work_date, record.last_out, record.first_in)
            return None
        return hours
