from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def to_db(value: Optional[datetime]) -> Optional[datetime]:
    """MySQL DATETIME has no zone: aware values are stored as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)
