from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ActionType, WorkState


@dataclass(frozen=True)
class ActionRecord:
    """Domain entity: one logged attendance action (append-only)."""

    log_id: int
    employee_id: int
    action_type: ActionType
    timestamp: datetime


@dataclass(frozen=True)
class EmployeeStatus:
    """Read-model derived from the action log; never persisted."""

    is_working: bool = False
    is_on_break: bool = False
    last_action: Optional[ActionType] = None
    start_work_time: Optional[datetime] = None
    # id of the record this status was derived from; 0 for an empty history
    last_log_id: int = 0
    anchor_fallback: bool = False

    @property
    def state(self) -> WorkState:
        if self.is_on_break:
            return WorkState.ON_BREAK
        if self.is_working:
            return WorkState.WORKING
        return WorkState.OFF

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "is_working": self.is_working,
            "is_on_break": self.is_on_break,
            "last_action": self.last_action.value if self.last_action else None,
            "start_work_time": self.start_work_time.isoformat() if self.start_work_time else None,
        }
