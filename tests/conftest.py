from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest
import pytz

from src.timeclock.timeclock.attendance.model import ActionRecord
from src.timeclock.timeclock.core.enums import ActionType, Role, StatusColor
from src.timeclock.timeclock.core.exceptions import ConflictError
from src.timeclock.timeclock.employees.model import Employee
from src.timeclock.timeclock.summaries.model import DailySummary


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=pytz.UTC)


class InMemoryActionLog:
    """Action log fake honouring the (employee_id, after_id) uniqueness rule."""

    def __init__(self):
        self.records: list[ActionRecord] = []
        self._claimed: set[tuple[int, int]] = set()
        self._id = 0
        self.fail_with: Optional[Exception] = None

    def _last_id(self, employee_id: int) -> int:
        last = self.most_recent(employee_id)
        return last.log_id if last else 0

    def add(self, employee_id: int, action_type: ActionType, timestamp: datetime) -> ActionRecord:
        """Seed history directly, bypassing validation."""
        return self.append(
            employee_id=employee_id,
            action_type=action_type,
            timestamp=timestamp,
            after_id=self._last_id(employee_id),
        )

    def append(self, *, employee_id: int, action_type: ActionType, timestamp: datetime, after_id: int = 0) -> ActionRecord:
        if self.fail_with is not None:
            raise self.fail_with
        if (employee_id, after_id) in self._claimed:
            raise ConflictError(f"log position after {after_id} already taken")
        self._claimed.add((employee_id, after_id))
        self._id += 1
        rec = ActionRecord(log_id=self._id, employee_id=employee_id, action_type=action_type, timestamp=timestamp)
        self.records.append(rec)
        return rec

    def query_range(self, employee_id: int, *, start=None, end=None, descending: bool = True, limit=None):
        if self.fail_with is not None:
            raise self.fail_with
        items = [
            r
            for r in self.records
            if r.employee_id == employee_id
            and (start is None or r.timestamp >= start)
            and (end is None or r.timestamp <= end)
        ]
        items.sort(key=lambda r: (r.timestamp, r.log_id), reverse=descending)
        return items[:limit] if limit is not None else items

    def most_recent(self, employee_id: int) -> Optional[ActionRecord]:
        if self.fail_with is not None:
            raise self.fail_with
        items = self.query_range(employee_id, descending=True, limit=1)
        return items[0] if items else None

    def get_by_id(self, log_id: int) -> Optional[ActionRecord]:
        if self.fail_with is not None:
            raise self.fail_with
        return next((r for r in self.records if r.log_id == log_id), None)


class InMemorySummaries:
    def __init__(self):
        self.by_key: dict[tuple[int, date], DailySummary] = {}
        self.upserts = 0
        self.fail_with: Optional[Exception] = None

    def upsert_summary(self, *, employee_id, work_date, total_work_minutes, total_break_minutes, is_late, under_hours, status_color):
        if self.fail_with is not None:
            raise self.fail_with
        self.upserts += 1
        summary = DailySummary(
            employee_id=employee_id,
            date=work_date,
            total_work_minutes=total_work_minutes,
            total_break_minutes=total_break_minutes,
            is_late=is_late,
            under_hours=under_hours,
            status_color=status_color,
        )
        self.by_key[(employee_id, work_date)] = summary
        return summary

    def get_summary(self, employee_id, work_date):
        return self.by_key.get((employee_id, work_date))

    def query_summaries(self, *, start_date, end_date, employee_id=None):
        items = [
            s
            for s in self.by_key.values()
            if start_date <= s.date <= end_date and (employee_id is None or s.employee_id == employee_id)
        ]
        items.sort(key=lambda s: (s.date, s.employee_id))
        return items


class InMemoryEmployees:
    def __init__(self, employees):
        self.by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self.by_id.get(employee_id)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda e: e.name)


def make_summary(employee_id: int, day: date, work: int, *, brk: int = 0, late: bool = False, color=None) -> DailySummary:
    under = work < 480
    return DailySummary(
        employee_id=employee_id,
        date=day,
        total_work_minutes=work,
        total_break_minutes=brk,
        is_late=late,
        under_hours=under,
        status_color=color or (StatusColor.RED if under else StatusColor.GREEN),
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Monday, after the 15:00 start hour
    return utc(2026, 2, 2, 16, 0, 0)


@pytest.fixture
def action_log() -> InMemoryActionLog:
    return InMemoryActionLog()


@pytest.fixture
def summary_store() -> InMemorySummaries:
    return InMemorySummaries()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, name="Alice", email="alice@example.com"),
            Employee(employee_id=2, name="Bob", email="bob@example.com"),
            Employee(employee_id=9, name="Admin", email="admin@example.com", role=Role.ADMIN),
        ]
    )


@pytest.fixture
def make_summary_factory():
    return make_summary
