"""Attendance state machine: which action is legal from which state."""

from __future__ import annotations

import calendar
from datetime import datetime

from ..common.datetime_utils import to_local
from ..core.enums import ActionType, WorkState
from ..core.exceptions import InvalidTransitionError
from .model import EmployeeStatus
from .policy import AttendancePolicy

TRANSITIONS: dict[tuple[WorkState, ActionType], WorkState] = {
    (WorkState.OFF, ActionType.START_WORK): WorkState.WORKING,
    (WorkState.WORKING, ActionType.START_BREAK): WorkState.ON_BREAK,
    (WorkState.ON_BREAK, ActionType.END_BREAK): WorkState.WORKING,
    (WorkState.WORKING, ActionType.END_WORK): WorkState.OFF,
}

REJECTIONS: dict[tuple[WorkState, ActionType], str] = {
    (WorkState.WORKING, ActionType.START_WORK): "Work already started",
    (WorkState.ON_BREAK, ActionType.START_WORK): "Work already started; end the active break instead",
    (WorkState.OFF, ActionType.START_BREAK): "Cannot start break before starting work",
    (WorkState.ON_BREAK, ActionType.START_BREAK): "Break is already active",
    (WorkState.OFF, ActionType.END_BREAK): "Cannot end break if break is not active",
    (WorkState.WORKING, ActionType.END_BREAK): "Cannot end break if break is not active",
    (WorkState.ON_BREAK, ActionType.END_WORK): "Cannot end work while break is active",
    (WorkState.OFF, ActionType.END_WORK): "Cannot end work if work has not started",
}


def next_state(state: WorkState, action: ActionType) -> WorkState:
    """Target state of a transition; raises InvalidTransitionError for every other pair."""

    target = TRANSITIONS.get((state, action))
    if target is None:
        reason = REJECTIONS.get((state, action), f"Cannot {action.value} while {state.value}")
        raise InvalidTransitionError(reason)
    return target


class ActionValidator:
    def __init__(self, policy: AttendancePolicy | None = None):
        self._policy = policy or AttendancePolicy()

    def validate(self, status: EmployeeStatus, action: ActionType, *, now: datetime) -> WorkState:
        """Check ``action`` against the status and the request's wall-clock time.

        Read-only. Returns the state the employee moves to when the action is appended.
        """

        if action == ActionType.START_WORK:
            self._check_start_window(now)
        return next_state(status.state, action)

    def _check_start_window(self, now: datetime) -> None:
        local_now = to_local(now, self._policy.timezone)

        if local_now.weekday() not in self._policy.work_weekdays:
            days = ", ".join(calendar.day_name[d] for d in self._policy.work_weekdays)
            raise InvalidTransitionError(
                f"Work not allowed on {calendar.day_name[local_now.weekday()]} (allowed days: {days})"
            )

        if local_now.hour < self._policy.work_start_hour:
            raise InvalidTransitionError(f"Work can only start after {self._policy.work_start_hour}:00")
