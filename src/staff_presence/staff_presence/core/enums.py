from __future__ import annotations

from enum import Enum


class RoleClass(str, Enum):
    """Role family of a person; also the stream a location posting arrives on."""

    TEACHER = "teacher"
    EMPLOYEE = "employee"
    OTHER = "other"


class EventKind(str, Enum):
    IN = "in"
    OUT = "out"


class PresenceStatus(str, Enum):
    """Presence derived from a day's DTR record. Never persisted."""

    NO_RECORD = "NO_RECORD"
    IN_CAMPUS = "IN_CAMPUS"
    PRESENT = "PRESENT"
    INCOMPLETE = "INCOMPLETE"


class PostingState(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
