from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import StatusColor


@dataclass(frozen=True)
class DailySummary:
    """One completed shift folded into a day, keyed by (employee_id, date).

    ``date`` is the date the shift started on, so overnight shifts land on the
    day they began.
    """

    employee_id: int
    date: date
    total_work_minutes: int
    total_break_minutes: int
    is_late: bool
    under_hours: bool
    status_color: StatusColor

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "total_work_minutes": self.total_work_minutes,
            "total_break_minutes": self.total_break_minutes,
            "is_late": self.is_late,
            "under_hours": self.under_hours,
            "status_color": self.status_color.value,
        }
