from __future__ import annotations

from typing import Optional

from ..core.enums import RoleClass
from .model import LocationPosting

# labels an exact posted_at tie; never outranks a newer post
_ROLE_RANK = {RoleClass.TEACHER: 2, RoleClass.EMPLOYEE: 1, RoleClass.OTHER: 0}


def _rank(posting: LocationPosting) -> tuple:
    return posting.posted_at, _ROLE_RANK.get(posting.role_at_posting, 0)


def choose_current(current: Optional[LocationPosting], submitted: LocationPosting) -> LocationPosting:
    """Most recent ``posted_at`` wins, whichever stream it came through.

    On an exact tie the declared role decides (teacher, then employee, then
    other), so the outcome does not depend on which submission arrived first.
    A tie with the same role keeps the stored posting.
    """
    if current is None or _rank(submitted) > _rank(current):
        return submitted
    return current
