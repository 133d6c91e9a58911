from __future__ import annotations

from datetime import date

from ..core.enums import ActionType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_action_type(value) -> ActionType:
    if isinstance(value, ActionType):
        return value
    if not value or not str(value).strip():
        raise ValidationError("action_type is required")
    try:
        return ActionType(str(value).strip())
    except ValueError:
        allowed = ", ".join(a.value for a in ActionType)
        raise ValidationError(f"Unknown action_type {value!r} (expected one of: {allowed})") from None


def require_date(value: str, field_name: str) -> date:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("end date must not be before start date")
