from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import ActionRecord
from ..attendance.policy import AttendancePolicy
from ..attendance.repository import ActionLogRepository
from ..attendance.strategies.base import LatenessStrategy
from ..attendance.strategies.never_late_strategy import NeverLateStrategy
from ..common.datetime_utils import local_date
from ..core.enums import ActionType, StatusColor
from ..core.exceptions import ReconstructionError
from .model import DailySummary
from .repository import SummaryRepository


@dataclass(frozen=True)
class ShiftTotals:
    total_work_minutes: int
    total_break_minutes: int


def _round_minutes(value: float) -> int:
    # half-up, so 29.5 minutes reads as 30
    return int(math.floor(value + 0.5))


def _minutes_between(start: ActionRecord, end: ActionRecord) -> float:
    return (end.timestamp - start.timestamp).total_seconds() / 60


def reconstruct_shift(window: Sequence[ActionRecord], end_record: ActionRecord) -> list[ActionRecord]:
    """Rebuild the shift closed by ``end_record`` from a most-recent-first window.

    Returns the shift's records in chronological order, ``start_work`` first and
    ``end_record`` last.
    """

    buffer: list[ActionRecord] = []
    for record in window:
        if record.log_id == end_record.log_id:
            continue
        if record.action_type == ActionType.END_WORK:
            raise ReconstructionError(
                f"hit end_work {record.log_id} before a start_work while rebuilding shift ending at {end_record.log_id}"
            )
        buffer.append(record)
        if record.action_type == ActionType.START_WORK:
            buffer.reverse()
            buffer.append(end_record)
            return buffer

    raise ReconstructionError(
        f"no start_work within the last {len(window)} records before end_work {end_record.log_id}"
    )


def compute_totals(shift: Sequence[ActionRecord]) -> ShiftTotals:
    """Worked and break minutes of a chronologically ordered shift."""

    duration = _minutes_between(shift[0], shift[-1])

    break_minutes = 0.0
    open_break: Optional[ActionRecord] = None
    for record in shift:
        if record.action_type == ActionType.START_BREAK:
            open_break = record
        elif record.action_type == ActionType.END_BREAK and open_break is not None:
            break_minutes += _minutes_between(open_break, record)
            open_break = None

    return ShiftTotals(
        total_work_minutes=max(0, _round_minutes(duration - break_minutes)),
        total_break_minutes=_round_minutes(break_minutes),
    )


class ShiftSummarizer:
    """Fold a completed shift into the DailySummary of the day it started."""

    def __init__(
        self,
        actions: ActionLogRepository,
        summaries: SummaryRepository,
        *,
        policy: AttendancePolicy | None = None,
        lateness: LatenessStrategy | None = None,
    ):
        self._actions = actions
        self._summaries = summaries
        self._policy = policy or AttendancePolicy()
        self._lateness = lateness or NeverLateStrategy()

    def reconstruct(self, employee_id: int, end_record: ActionRecord) -> list[ActionRecord]:
        window = self._actions.query_range(
            employee_id,
            end=end_record.timestamp,
            descending=True,
            limit=self._policy.scan_limit,
        )
        return reconstruct_shift(window, end_record)

    def summarize(self, employee_id: int, end_record: ActionRecord) -> DailySummary:
        """Rebuild, classify and upsert. Raises ReconstructionError without writing anything.

        Re-running it for the same end record overwrites the same key with the same values.
        """

        shift = self.reconstruct(employee_id, end_record)
        start = shift[0]
        totals = compute_totals(shift)

        under_hours = totals.total_work_minutes < self._policy.full_shift_minutes
        return self._summaries.upsert_summary(
            employee_id=employee_id,
            work_date=local_date(start.timestamp, self._policy.timezone),
            total_work_minutes=totals.total_work_minutes,
            total_break_minutes=totals.total_break_minutes,
            is_late=self._lateness.is_late(shift_start=start.timestamp, timezone=self._policy.timezone),
            under_hours=under_hours,
            status_color=StatusColor.RED if under_hours else StatusColor.GREEN,
        )
