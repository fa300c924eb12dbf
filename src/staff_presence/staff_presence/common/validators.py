from __future__ import annotations

from typing import Optional

from ..core.enums import PostingState, RoleClass
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_int(value, field_name: str, *, max_value: Optional[int] = None) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    elif isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must not exceed {max_value}")
    return number


def require_role(value, field_name: str = "role") -> RoleClass:
    if isinstance(value, RoleClass):
        return value
    try:
        return RoleClass(str(value).strip().lower())
    except ValueError as e:
        allowed = ", ".join(r.value for r in RoleClass)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from e


def optional_text(value: Optional[str]) -> str:
    return value.strip() if value else ""


def optional_state(value) -> Optional[PostingState]:
    if value is None or value == "":
        return None
    if isinstance(value, PostingState):
        return value
    try:
        return PostingState(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError("state must be 'active' or 'expired'") from e
