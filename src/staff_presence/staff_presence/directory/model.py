from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RoleClass


@dataclass(frozen=True)
class Person:
    """Directory entry. Read-only to the attendance core."""

    identifier: str
    display_name: str
    role_class: RoleClass
    employment_classification: Optional[str] = None
