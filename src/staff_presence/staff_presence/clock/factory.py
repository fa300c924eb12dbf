from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import EventKind
from ..core.exceptions import ValidationError
from .strategies.base import ClockEventStrategy
from .strategies.in_strategy import ClockInStrategy
from .strategies.out_strategy import ClockOutStrategy


@dataclass
class ClockStrategyFactory:
    """Factory Pattern: choose the strategy for an event kind."""

    _strategies: dict[EventKind, ClockEventStrategy] = field(
        default_factory=lambda: {
            EventKind.IN: ClockInStrategy(),
            EventKind.OUT: ClockOutStrategy(),
        }
    )

    def for_kind(self, kind: EventKind) -> ClockEventStrategy:
        try:
            return self._strategies[EventKind(kind)]
        except (KeyError, ValueError) as e:
            raise ValidationError(f"Unsupported clock event: {kind!r}") from e
