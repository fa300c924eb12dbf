from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValidationError(f"Unknown timezone: {name}") from e


def coerce_timestamp(value: Union[datetime, str, None], field_name: str = "timestamp") -> datetime:
    """Accept a datetime or an ISO-8601 string (``Z`` suffix allowed)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"{field_name} is not a valid ISO-8601 timestamp") from e
    raise ValidationError(f"{field_name} is required")


def coerce_date(value: Union[date, str, None], field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_date(value.strip())
        except ValueError as e:
            raise ValidationError(f"{field_name} must be YYYY-MM-DD") from e
    raise ValidationError(f"{field_name} is required")


def local_date(at: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of ``at`` in the configured zone.

    Naive timestamps are taken to be local already.
    """
    if at.tzinfo is not None and tz is not None:
        return at.astimezone(tz).date()
    return at.date()


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start) / timedelta(hours=1)


def now_in(tz: Optional[tzinfo] = None) -> datetime:
    """Current time: aware in ``tz`` when one is configured, local naive otherwise."""
    return datetime.now(tz) if tz is not None else now_local()


def normalize_timestamp(value: Union[datetime, str, None], tz: Optional[tzinfo] = None,
                        field_name: str = "at") -> datetime:
    """Bring a timestamp into the one form used for comparisons.

    With ``tz`` every value is aware in ``tz`` (naive input is taken as wall
    time there). Without it every value is local naive; aware input is
    converted to local time first. ``None`` means now.
    """
    if value is None:
        return now_in(tz)
    at = coerce_timestamp(value, field_name)
    if tz is not None:
        return at.replace(tzinfo=tz) if at.tzinfo is None else at.astimezone(tz)
    if at.tzinfo is not None:
        return at.astimezone().replace(tzinfo=None)
    return at
