from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import StatusColor
from .model import DailySummary


class SummaryRepository(Protocol):
    def upsert_summary(
        self,
        *,
        employee_id: int,
        work_date: date,
        total_work_minutes: int,
        total_break_minutes: int,
        is_late: bool,
        under_hours: bool,
        status_color: StatusColor,
    ) -> DailySummary:
        """Create or overwrite the summary for (employee_id, work_date)."""

        raise NotImplementedError

    def get_summary(self, employee_id: int, work_date: date) -> Optional[DailySummary]:
        raise NotImplementedError

    def query_summaries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[DailySummary]:
        """Summaries with start_date <= date <= end_date, oldest first."""

        raise NotImplementedError
