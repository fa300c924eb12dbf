from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PostingState, RoleClass


@dataclass(frozen=True)
class LocationPosting:
    """Where a person said they are, valid until ``expires_at``."""

    identifier: str
    location: str
    reason: str
    posted_at: datetime
    expires_at: datetime
    duration_minutes: int
    role_at_posting: RoleClass
    posted_by_identifier: str
    posted_by_name: str = ""

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class PostingView:
    """A posting together with its staleness at read time."""

    posting: LocationPosting
    is_expired: bool

    @property
    def state(self) -> PostingState:
        return PostingState.EXPIRED if self.is_expired else PostingState.ACTIVE


@dataclass(frozen=True)
class StaffBoardEntry:
    identifier: str
    display_name: str
    role_class: RoleClass
    view: Optional[PostingView] = None

    @property
    def posted(self) -> bool:
        return self.view is not None

    @property
    def location(self) -> Optional[str]:
        return self.view.posting.location if self.view else None
