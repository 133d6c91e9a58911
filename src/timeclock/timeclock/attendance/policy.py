from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.constants import (
    DEFAULT_FULL_SHIFT_MINUTES,
    DEFAULT_SCAN_LIMIT,
    DEFAULT_STATUS_LOOKBACK_HOURS,
    DEFAULT_TIMEZONE,
    DEFAULT_WORK_START_HOUR,
    DEFAULT_WORK_WEEKDAYS,
)


@dataclass(frozen=True)
class AttendancePolicy:
    """Configurable attendance rules (weekdays use datetime.weekday(): Monday=0)."""

    work_weekdays: tuple[int, ...] = DEFAULT_WORK_WEEKDAYS
    work_start_hour: int = DEFAULT_WORK_START_HOUR
    full_shift_minutes: int = DEFAULT_FULL_SHIFT_MINUTES
    timezone: str = DEFAULT_TIMEZONE
    scan_limit: int = DEFAULT_SCAN_LIMIT
    status_lookback_hours: int = DEFAULT_STATUS_LOOKBACK_HOURS
    lateness_rule: str = "never"
    late_cutoff: str | None = None
    late_grace_minutes: int = 0

    @classmethod
    def from_settings(cls, values: Mapping[str, Any] | None) -> "AttendancePolicy":
        values = dict(values or {})
        weekdays = values.get("work_weekdays", DEFAULT_WORK_WEEKDAYS)
        if isinstance(weekdays, str):
            weekdays = [w for w in weekdays.split(",") if w.strip()]
        return cls(
            work_weekdays=tuple(sorted(int(w) for w in weekdays)),
            work_start_hour=int(values.get("work_start_hour", DEFAULT_WORK_START_HOUR)),
            full_shift_minutes=int(values.get("full_shift_minutes", DEFAULT_FULL_SHIFT_MINUTES)),
            timezone=str(values.get("timezone", DEFAULT_TIMEZONE)),
            scan_limit=int(values.get("scan_limit", DEFAULT_SCAN_LIMIT)),
            status_lookback_hours=int(values.get("status_lookback_hours", DEFAULT_STATUS_LOOKBACK_HOURS)),
            lateness_rule=str(values.get("lateness_rule", "never")),
            late_cutoff=values.get("late_cutoff") or None,
            late_grace_minutes=int(values.get("late_grace_minutes", 0)),
        )
