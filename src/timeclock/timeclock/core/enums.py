from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role as stored alongside the employee record."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class ActionType(str, Enum):
    """Discrete actions an employee can log."""

    START_WORK = "start_work"
    END_WORK = "end_work"
    START_BREAK = "start_break"
    END_BREAK = "end_break"


class WorkState(str, Enum):
    """Attendance state derived from the last logged action."""

    OFF = "OFF"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"


class StatusColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
