import threading
from dataclasses import replace
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest

from staff_presence.container import build_container
from staff_presence.core.enums import PostingState, RoleClass
from staff_presence.core.exceptions import ValidationError
from staff_presence.presence.resolver import choose_current

T0 = datetime(2024, 5, 1, 9, 0)


def minutes(n: int) -> datetime:
    return T0 + timedelta(minutes=n)


def test_newer_post_from_other_stream_takes_over(presence_service):
    presence_service.post_location("E-010", RoleClass.EMPLOYEE, "Library", "", 30, T0)
    presence_service.post_location("E-010", RoleClass.TEACHER, "Gym", "", 15, minutes(5))

    view = presence_service.current_location("E-010", now=minutes(10))
    assert view.posting.location == "Gym"
    assert view.posting.role_at_posting == RoleClass.TEACHER
    assert view.is_expired is False

    assert presence_service.current_location("E-010", now=minutes(21)).is_expired is True


def test_exact_expiry_moment_is_still_active(presence_service):
    presence_service.post_location("E-010", "employee", "Registrar", duration_minutes=30, at=T0)

    assert presence_service.current_location("E-010", now=minutes(30)).state == PostingState.ACTIVE
    assert presence_service.current_location("E-010", now=minutes(31)).state == PostingState.EXPIRED


def test_late_older_post_does_not_displace_newer(presence_service):
    presence_service.post_location("E-010", "teacher", "Gym", at=minutes(5))
    result = presence_service.post_location("E-010", "employee", "Library", at=T0)

    assert result.location == "Gym"
    assert presence_service.current_location("E-010", now=minutes(6)).posting.location == "Gym"
    # still kept in history
    assert [v.posting.location for v in presence_service.recent_postings("E-010", now=minutes(6))] == [
        "Gym",
        "Library",
    ]


@pytest.mark.parametrize("first,second", [("teacher", "employee"), ("employee", "teacher")])
def test_exact_tie_prefers_teacher_in_either_order(presence_service, first, second):
    where = {"teacher": "Room 101", "employee": "Faculty Office"}
    presence_service.post_location("T-001", first, where[first], at=T0)
    presence_service.post_location("T-001", second, where[second], at=T0)

    posting = presence_service.current_location("T-001", now=T0).posting
    assert posting.location == "Room 101"
    assert posting.role_at_posting == RoleClass.TEACHER


def test_exact_tie_same_role_keeps_stored(presence_service):
    presence_service.post_location("E-010", "employee", "Library", at=T0)
    result = presence_service.post_location("E-010", "employee", "Canteen", at=T0)

    assert result.location == "Library"


def test_offset_timestamp_read_with_default_now(directory):
    board = build_container(backend="memory", directory=directory).presence_service
    posted = board.post_location("E-010", "employee", "Library", at="2024-05-01T08:00:00Z")
    board.post_location("E-010", "teacher", "Gym", at=posted.posted_at + timedelta(minutes=1))

    view = board.current_location("E-010")
    assert view.posting.location == "Gym"
    assert view.posting.posted_at.tzinfo is None
    assert view.is_expired is True
    assert [v.posting.location for v in board.active_postings()] == ["Gym"]


def test_reason_is_not_carried_over(presence_service):
    presence_service.post_location("T-001", "teacher", "Clinic", "Check-up", 30, T0)
    presence_service.post_location("T-001", "teacher", "Room 101", None, 30, minutes(1))

    assert presence_service.current_location("T-001", now=minutes(2)).posting.reason == ""


def test_default_duration_applies(presence_service):
    posting = presence_service.post_location("T-001", "teacher", "Library", at=T0)

    assert posting.duration_minutes == 30
    assert posting.expires_at == minutes(30)


def test_poster_name_comes_from_directory(presence_service):
    own = presence_service.post_location("T-001", "teacher", "Library", at=T0)
    unknown = presence_service.post_location("Z-555", "other", "Gate 2", at=T0)
    on_behalf = presence_service.post_location("E-010", "employee", "Canteen", at=T0, posted_by="T-002")

    assert own.posted_by_name == "Maria Santos"
    assert unknown.posted_by_name == ""
    assert unknown.posted_by_identifier == "Z-555"
    assert on_behalf.posted_by_identifier == "T-002"
    assert on_behalf.posted_by_name == "Jose Reyes"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"identifier": "", "poster_role": "teacher", "location": "Gym"},
        {"identifier": "T-001", "poster_role": "janitor", "location": "Gym"},
        {"identifier": "T-001", "poster_role": "teacher", "location": "  "},
        {"identifier": "T-001", "poster_role": "teacher", "location": "Gym", "duration_minutes": 0},
        {"identifier": "T-001", "poster_role": "teacher", "location": "Gym", "duration_minutes": -5},
        {"identifier": "T-001", "poster_role": "teacher", "location": "Gym", "duration_minutes": 100000},
        {"identifier": "T-001", "poster_role": "teacher", "location": "Gym", "at": "not a time"},
    ],
)
def test_invalid_posts_are_rejected_without_storing(presence_service, postings_repo, kwargs):
    with pytest.raises(ValidationError):
        presence_service.post_location(**kwargs)
    assert list(postings_repo.iter_current()) == []


def test_no_posting_returns_none(presence_service):
    assert presence_service.current_location("T-001", now=T0) is None


def test_active_postings_is_lazy_and_restartable(presence_service):
    listing = presence_service.active_postings(now=minutes(20))
    presence_service.post_location("T-001", "teacher", "Library", duration_minutes=10, at=T0)
    presence_service.post_location("E-010", "employee", "Canteen", duration_minutes=60, at=minutes(1))

    first = [(v.posting.identifier, v.is_expired) for v in listing]
    second = [(v.posting.identifier, v.is_expired) for v in listing]

    assert first == [("E-010", False), ("T-001", True)]
    assert second == first


def test_staff_board_joins_directory_and_postings(presence_service):
    presence_service.post_location("E-010", "teacher", "Gym", duration_minutes=60, at=T0)
    presence_service.post_location("T-001", "teacher", "Room 101", duration_minutes=5, at=T0)
    presence_service.post_location("V-777", "other", "Lobby", duration_minutes=60, at=T0)

    board = {e.identifier: e for e in presence_service.staff_board(now=minutes(10))}

    assert set(board) == {"T-001", "T-002", "E-010", "O-100", "V-777"}
    assert board["E-010"].role_class == RoleClass.TEACHER
    assert board["T-002"].posted is False
    assert board["T-002"].location is None
    assert board["V-777"].display_name == ""
    assert board["T-001"].view.state == PostingState.EXPIRED


def test_staff_board_filters(presence_service):
    presence_service.post_location("E-010", "employee", "Registrar", duration_minutes=60, at=T0)
    presence_service.post_location("T-001", "teacher", "Room 101", duration_minutes=5, at=T0)
    now = minutes(10)

    teachers = presence_service.staff_board(role="teacher", now=now)
    unposted = presence_service.staff_board(posted=False, now=now)
    active = presence_service.staff_board(state="active", now=now)
    expired = presence_service.staff_board(state=PostingState.EXPIRED, now=now)

    assert {e.identifier for e in teachers} == {"T-001", "T-002"}
    assert {e.identifier for e in unposted} == {"T-002", "O-100"}
    assert [e.identifier for e in active] == ["E-010"]
    assert [e.identifier for e in expired] == ["T-001"]


def test_staff_board_rejects_unknown_state(presence_service):
    with pytest.raises(ValidationError):
        presence_service.staff_board(state="gone")


def test_recent_postings_limit(presence_service):
    for n in range(7):
        presence_service.post_location("T-001", "teacher", f"Room {n}", at=minutes(n))

    recent = presence_service.recent_postings("T-001", now=minutes(7))

    assert [v.posting.location for v in recent] == ["Room 6", "Room 5", "Room 4", "Room 3", "Room 2"]
    assert len(presence_service.recent_postings("T-001", limit=2, now=minutes(7))) == 2


def test_concurrent_posts_settle_on_newest(presence_service):
    stamps = [minutes(n) for n in range(25)]
    barrier = threading.Barrier(len(stamps))

    def _go(n):
        barrier.wait()
        role = "teacher" if n % 2 else "employee"
        return presence_service.post_location("E-010", role, f"Spot {n}", at=stamps[n])

    with ThreadPoolExecutor(max_workers=len(stamps)) as pool:
        list(pool.map(_go, range(len(stamps))))

    posting = presence_service.current_location("E-010", now=minutes(25)).posting
    assert posting.location == "Spot 24"
    assert posting.role_at_posting == RoleClass.EMPLOYEE
    assert len(presence_service.recent_postings("E-010", limit=100, now=minutes(25))) == 25


def test_resolver_keeps_newer_current(presence_service):
    newer = presence_service.post_location("T-002", "teacher", "Gym", at=minutes(5))
    older = replace(newer, posted_at=T0, location="Library")

    assert choose_current(newer, older) is newer
    assert choose_current(None, older) is older
