from datetime import date, datetime

import pytest

from staff_presence.clock.factory import ClockStrategyFactory
from staff_presence.clock.model import ClockEvent, DtrRecord
from staff_presence.clock.status import derive_status
from staff_presence.clock.strategies.in_strategy import ClockInStrategy
from staff_presence.clock.strategies.out_strategy import ClockOutStrategy
from staff_presence.core.enums import EventKind, PresenceStatus
from staff_presence.core.exceptions import ValidationError

DAY = date(2024, 5, 1)
EIGHT = datetime(2024, 5, 1, 8, 0)
NOON = datetime(2024, 5, 1, 12, 0)


def test_factory_picks_strategy_by_kind():
    factory = ClockStrategyFactory()

    assert isinstance(factory.for_kind(EventKind.IN), ClockInStrategy)
    assert isinstance(factory.for_kind("out"), ClockOutStrategy)


def test_factory_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        ClockStrategyFactory().for_kind("break")


def test_in_strategy_creates_record_when_absent():
    record = ClockInStrategy().apply(None, identifier="T-001", work_date=DAY, at=EIGHT)

    assert record.first_in == EIGHT
    assert record.last_out is None
    assert record.events == (ClockEvent(EventKind.IN, EIGHT),)


def test_out_strategy_leaves_first_in_alone():
    base = DtrRecord("T-001", DAY, first_in=EIGHT, events=(ClockEvent(EventKind.IN, EIGHT),))
    record = ClockOutStrategy().apply(base, identifier="T-001", work_date=DAY, at=NOON)

    assert record.first_in == EIGHT
    assert record.last_out == NOON


@pytest.mark.parametrize(
    "first_in,last_out,expected",
    [
        (None, None, PresenceStatus.NO_RECORD),
        (EIGHT, None, PresenceStatus.IN_CAMPUS),
        (NOON, EIGHT, PresenceStatus.IN_CAMPUS),
        (EIGHT, NOON, PresenceStatus.PRESENT),
        (EIGHT, EIGHT, PresenceStatus.PRESENT),
        (None, NOON, PresenceStatus.INCOMPLETE),
    ],
)
def test_derive_status(first_in, last_out, expected):
    record = DtrRecord("T-001", DAY, first_in=first_in, last_out=last_out)

    assert derive_status(record) == expected
    assert derive_status(record) == derive_status(record)


def test_derive_status_without_record():
    assert derive_status(None) == PresenceStatus.NO_RECORD
