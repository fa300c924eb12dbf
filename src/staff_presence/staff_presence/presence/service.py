from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Callable, Iterator, Optional, Union

from ..common.datetime_utils import normalize_timestamp, now_in
from ..common.logger import get_logger
from ..common.retry import RetryPolicy
from ..common.validators import optional_state, optional_text, require_non_empty, require_positive_int, require_role
from ..core.constants import DEFAULT_POSTING_MINUTES, DEFAULT_RECENT_POSTINGS_LIMIT, MAX_POSTING_MINUTES
from ..core.enums import PostingState, RoleClass
from ..directory.repository import DirectoryLookup
from .model import LocationPosting, PostingView, StaffBoardEntry
from .repository import PostingRepository
from .resolver import choose_current

logger = get_logger(__name__)

Timestamp = Union[datetime, str, None]


class ActivePostings:
    """Lazy, restartable listing of canonical postings.

    Each iteration re-reads the store and evaluates staleness at that moment.
    """

    def __init__(self, postings: PostingRepository, clock: Callable[[], datetime]):
        self._postings = postings
        self._clock = clock

    def __iter__(self) -> Iterator[PostingView]:
        now = self._clock()
        for posting in self._postings.iter_current():
            yield PostingView(posting=posting, is_expired=posting.is_expired(now))


class PresenceBoardService:
    """Use case: post "where am I" and read the merged board of both role streams."""

    def __init__(
        self,
        postings: PostingRepository,
        directory: DirectoryLookup,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        tz: Optional[tzinfo] = None,
        default_minutes: int = DEFAULT_POSTING_MINUTES,
        max_minutes: int = MAX_POSTING_MINUTES,
    ):
        self._postings = postings
        self._directory = directory
        self._retry = retry_policy or RetryPolicy()
        self._tz = tz
        self._default_minutes = int(default_minutes)
        self._max_minutes = int(max_minutes)

    def post_location(
        self,
        identifier: str,
        poster_role: Union[RoleClass, str],
        location: str,
        reason: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        at: Timestamp = None,
        *,
        posted_by: Optional[str] = None,
    ) -> LocationPosting:
        """Submit a posting and return the canonical posting for ``identifier``.

        That is the submission itself unless a newer posting is already stored.
        """
        identifier = require_non_empty(identifier, "identifier")
        role = require_role(poster_role, "poster_role")
        location = require_non_empty(location, "location")
        minutes = require_positive_int(
            self._default_minutes if duration_minutes is None else duration_minutes,
            "duration_minutes",
            max_value=self._max_minutes,
        )
        posted_at = self._normalize(at)
        poster_id = (posted_by or "").strip() or identifier

        # advisory only: unknown people may still post
        poster = self._directory.get_person(poster_id)

        submitted = LocationPosting(
            identifier=identifier,
            location=location,
            reason=optional_text(reason),
            posted_at=posted_at,
            expires_at=posted_at + timedelta(minutes=minutes),
            duration_minutes=minutes,
            role_at_posting=role,
            posted_by_identifier=poster_id,
            posted_by_name=poster.display_name if poster else "",
        )
        current = self._retry.run(
            lambda: self._postings.submit(submitted, choose_current),
            operation="post location",
        )
        if current is submitted:
            logger.info("Location posted: %s -> %r (%s, %d min)", identifier, location, role.value, minutes)
        else:
            logger.info("Location for %s recorded but superseded by newer post at %s",
                        identifier, current.posted_at.isoformat())
        return current

    def current_location(self, identifier: str, now: Timestamp = None) -> Optional[PostingView]:
        identifier = require_non_empty(identifier, "identifier")
        posting = self._postings.get_current(identifier)
        if posting is None:
            return None
        return self.view_of(posting, now)

    def view_of(self, posting: LocationPosting, now: Timestamp = None) -> PostingView:
        """``posting`` with its staleness evaluated at ``now``."""
        return PostingView(posting=posting, is_expired=posting.is_expired(self._normalize(now)))

    def active_postings(self, now: Timestamp = None) -> ActivePostings:
        if now is None:
            return ActivePostings(self._postings, self._now)
        fixed = self._normalize(now)
        return ActivePostings(self._postings, lambda: fixed)

    def recent_postings(
        self,
        identifier: str,
        limit: int = DEFAULT_RECENT_POSTINGS_LIMIT,
        now: Timestamp = None,
    ) -> list[PostingView]:
        identifier = require_non_empty(identifier, "identifier")
        limit = require_positive_int(limit, "limit")
        moment = self._normalize(now)
        return [
            PostingView(posting=p, is_expired=p.is_expired(moment))
            for p in self._postings.recent(identifier, limit)
        ]

    def staff_board(
        self,
        *,
        role: Union[RoleClass, str, None] = None,
        state: Union[PostingState, str, None] = None,
        posted: Optional[bool] = None,
        now: Timestamp = None,
    ) -> list[StaffBoardEntry]:
        """Directory joined with current postings, one entry per identifier.

        The role shown is the one declared on the live posting, falling back to
        the directory's role family. Postings for people missing from the
        directory are listed with an empty name.
        """
        role_filter = require_role(role) if role else None
        state_filter = optional_state(state)

        views = {v.posting.identifier: v for v in self.active_postings(now)}
        entries: list[StaffBoardEntry] = []
        for person in self._directory.list_persons():
            view = views.pop(person.identifier, None)
            entries.append(
                StaffBoardEntry(
                    identifier=person.identifier,
                    display_name=person.display_name,
                    role_class=view.posting.role_at_posting if view else person.role_class,
                    view=view,
                )
            )
        for identifier, view in views.items():
            entries.append(
                StaffBoardEntry(
                    identifier=identifier,
                    display_name="",
                    role_class=view.posting.role_at_posting,
                    view=view,
                )
            )

        def _keep(entry: StaffBoardEntry) -> bool:
            if role_filter and entry.role_class != role_filter:
                return False
            if posted is not None and entry.posted != posted:
                return False
            if state_filter and (entry.view is None or entry.view.state != state_filter):
                return False
            return True

        return [e for e in entries if _keep(e)]

    def _now(self) -> datetime:
        return now_in(self._tz)

    def _normalize(self, at: Timestamp) -> datetime:
        return normalize_timestamp(at, self._tz, "at")
