from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import format_minutes
from ..common.validators import require_date_range
from ..core.enums import StatusColor
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..summaries.model import DailySummary
from ..summaries.repository import SummaryRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def employee_stats(summaries: Iterable[DailySummary]) -> dict:
    """Totals and day counts over a set of one employee's daily summaries."""

    items = list(summaries)
    total_work = sum(s.total_work_minutes for s in items)
    days = len(items)
    return {
        "days": days,
        "total_work_minutes": total_work,
        "total_break_minutes": sum(s.total_break_minutes for s in items),
        "total_hours": format_minutes(total_work),
        "avg_daily_minutes": round(total_work / days) if days else 0,
        "late_days": sum(1 for s in items if s.is_late),
        "under_hours_days": sum(1 for s in items if s.under_hours),
        "green_days": sum(1 for s in items if s.status_color == StatusColor.GREEN),
        "yellow_days": sum(1 for s in items if s.status_color == StatusColor.YELLOW),
        "red_days": sum(1 for s in items if s.status_color == StatusColor.RED),
    }


class ReportService:
    def __init__(self, summaries: SummaryRepository, employees: Optional[EmployeeRepository] = None):
        self._summaries = summaries
        self._employees = employees

    def _employee_label(self, employee_id: int, cache: dict[int, Optional[Employee]]) -> dict:
        if employee_id not in cache:
            cache[employee_id] = self._employees.get_by_id(employee_id) if self._employees else None
        emp = cache[employee_id]
        return {"name": emp.name if emp else "Unknown", "email": emp.email if emp else ""}

    def get_all_employee_summaries(self, *, start: date, end: date) -> list[dict]:
        """Every employee's summaries in range, newest first, labelled with name/email."""

        require_date_range(start, end)
        return self._rows(self._summaries.query_summaries(start_date=start, end_date=end), {})

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> ReportData:
        """Rows per summary plus one statistics entry per employee.

        Without an employee filter every known employee gets a statistics entry,
        including those with no summaries in range.
        """

        require_date_range(start, end)
        summaries = self._summaries.query_summaries(start_date=start, end_date=end, employee_id=employee_id)

        by_employee: dict[int, list[DailySummary]] = {}
        for s in summaries:
            by_employee.setdefault(s.employee_id, []).append(s)

        cache: dict[int, Optional[Employee]] = {}
        if employee_id is None and self._employees is not None:
            for emp in self._employees.list_all():
                cache[emp.employee_id] = emp
                by_employee.setdefault(emp.employee_id, [])

        rows = self._rows(summaries, cache)

        summary = []
        for emp_id, items in by_employee.items():
            entry = {"employee_id": emp_id}
            entry.update(self._employee_label(emp_id, cache))
            entry.update(employee_stats(items))
            summary.append(entry)

        summary.sort(key=lambda x: x["total_work_minutes"], reverse=True)
        return ReportData(rows=rows, summary=summary)

    def _rows(self, summaries: Iterable[DailySummary], cache: dict[int, Optional[Employee]]) -> list[dict]:
        rows = []
        for s in sorted(summaries, key=lambda r: (r.date, r.employee_id), reverse=True):
            row = s.to_dict()
            row.update(self._employee_label(s.employee_id, cache))
            row["worked_hours"] = format_minutes(s.total_work_minutes)
            row["break_hours"] = format_minutes(s.total_break_minutes)
            rows.append(row)
        return rows
