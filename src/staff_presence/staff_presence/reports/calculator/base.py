from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...clock.model import DtrRecord


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_hours(self, record: DtrRecord) -> Optional[float]:
        """Hours for the day, or None when the day has no usable in/out pair."""
        raise NotImplementedError
