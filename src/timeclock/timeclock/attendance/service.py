from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import ensure_utc, local_date, local_day_bounds, utc_now
from ..common.validators import require_action_type
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ActionType
from ..core.exceptions import ReconstructionError, StoreError, StoreUnavailableError, ValidationError
from ..employees.repository import EmployeeRepository
from ..summaries.model import DailySummary
from ..summaries.summarizer import ShiftSummarizer
from .model import ActionRecord, EmployeeStatus
from .policy import AttendancePolicy
from .repository import ActionLogRepository
from .state_machine import ActionValidator
from .status import StatusResolver

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        actions: ActionLogRepository,
        summarizer: ShiftSummarizer,
        employees: EmployeeRepository | None = None,
        *,
        policy: AttendancePolicy | None = None,
        resolver: StatusResolver | None = None,
        validator: ActionValidator | None = None,
    ):
        self._actions = actions
        self._summarizer = summarizer
        self._employees = employees
        self._policy = policy or AttendancePolicy()
        self._resolver = resolver or StatusResolver(actions, lookback_hours=self._policy.status_lookback_hours)
        self._validator = validator or ActionValidator(self._policy)

    def get_status(self, employee_id: int, *, now: datetime | None = None) -> EmployeeStatus:
        """Current status; degrades to the empty status when the store is down (status is advisory)."""
        try:
            return self._resolver.resolve(employee_id, now=now)
        except StoreUnavailableError:
            logger.warning("status lookup failed for employee %s; reporting empty status", employee_id, exc_info=True)
            return EmployeeStatus()

    def submit_action(self, employee_id: int, action_type, *, now: datetime | None = None) -> ActionRecord:
        action = require_action_type(action_type)
        now = ensure_utc(now or utc_now())

        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise ValidationError("Employee not found")

        status = self._resolver.resolve(employee_id, now=now)
        self._validator.validate(status, action, now=now)

        record = self._actions.append(
            employee_id=employee_id,
            action_type=action,
            timestamp=now,
            after_id=status.last_log_id,
        )
        logger.info("employee %s: %s accepted (log %s)", employee_id, action.value, record.log_id)

        if action == ActionType.END_WORK:
            self._close_shift(employee_id, record)
        return record

    def _close_shift(self, employee_id: int, end_record: ActionRecord) -> None:
        # The end_work append is already durable; a missing summary can be recomputed later.
        try:
            summary = self._summarizer.summarize(employee_id, end_record)
        except ReconstructionError as e:
            logger.error("no summary for employee %s after end_work %s: %s", employee_id, end_record.log_id, e)
            return
        except StoreError:
            logger.exception("storing summary failed for employee %s after end_work %s", employee_id, end_record.log_id)
            return
        except Exception:
            # end_work is already committed; the summary can be rebuilt with resummarize()
            logger.exception("summarizing failed for employee %s after end_work %s", employee_id, end_record.log_id)
            return

        logger.info(
            "employee %s: summary %s work=%s break=%s color=%s",
            employee_id,
            summary.date,
            summary.total_work_minutes,
            summary.total_break_minutes,
            summary.status_color.value,
        )

    def resummarize(self, employee_id: int, log_id: int) -> DailySummary:
        """Rebuild the summary of the shift closed by end_work ``log_id``.

        Same fold as on end_work, so repeating it overwrites the same row. Raises
        ReconstructionError when the shift start is out of reach.
        """
        record = self._actions.get_by_id(log_id)
        if record is None or record.employee_id != employee_id or record.action_type != ActionType.END_WORK:
            raise ValidationError(f"No end_work record {log_id} for employee {employee_id}")

        summary = self._summarizer.summarize(employee_id, record)
        logger.info("employee %s: summary %s recomputed from end_work %s", employee_id, summary.date, log_id)
        return summary

    def get_today_logs(self, employee_id: int, *, now: datetime | None = None) -> list[ActionRecord]:
        """Actions logged on the current local date, oldest first."""
        now = ensure_utc(now or utc_now())
        start, end = local_day_bounds(local_date(now, self._policy.timezone), self._policy.timezone)
        rows = self._actions.query_range(employee_id, start=start, end=end, descending=False)
        return [r for r in rows if r.timestamp < end]

    def get_history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[ActionRecord]:
        return list(self._actions.query_range(employee_id, descending=True, limit=limit))
