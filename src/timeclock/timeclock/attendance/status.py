from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..common.datetime_utils import ensure_utc, utc_now
from ..core.constants import DEFAULT_STATUS_LOOKBACK_HOURS
from ..core.enums import ActionType
from .model import EmployeeStatus
from .repository import ActionLogRepository

logger = logging.getLogger(__name__)

WORKING_ACTIONS = frozenset({ActionType.START_WORK, ActionType.END_BREAK})


class StatusResolver:
    """Derive an employee's current status from the global last action.

    The last record decides the state no matter how old it is, so a shift that
    crosses midnight keeps its status after the date rolls over.
    """

    def __init__(self, actions: ActionLogRepository, *, lookback_hours: int = DEFAULT_STATUS_LOOKBACK_HOURS):
        self._actions = actions
        self._lookback = timedelta(hours=int(lookback_hours))

    def resolve(self, employee_id: int, *, now: datetime | None = None) -> EmployeeStatus:
        now = ensure_utc(now or utc_now())

        last = self._actions.most_recent(employee_id)
        if last is None:
            return EmployeeStatus()

        is_working = last.action_type in WORKING_ACTIONS
        is_on_break = last.action_type == ActionType.START_BREAK

        if not (is_working or is_on_break):
            return EmployeeStatus(last_action=last.action_type, last_log_id=last.log_id)

        window = self._actions.query_range(employee_id, start=now - self._lookback, descending=True)
        start_work = next((r for r in window if r.action_type == ActionType.START_WORK), None)

        if start_work is not None:
            return EmployeeStatus(
                is_working=is_working,
                is_on_break=is_on_break,
                last_action=last.action_type,
                start_work_time=start_work.timestamp,
                last_log_id=last.log_id,
            )

        logger.warning(
            "no start_work within %s of %s for employee %s; anchoring session at last record %s (%s)",
            self._lookback,
            now.isoformat(),
            employee_id,
            last.log_id,
            last.timestamp.isoformat(),
        )
        return EmployeeStatus(
            is_working=is_working,
            is_on_break=is_on_break,
            last_action=last.action_type,
            start_work_time=last.timestamp,
            last_log_id=last.log_id,
            anchor_fallback=True,
        )
