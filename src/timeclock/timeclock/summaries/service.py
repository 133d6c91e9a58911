from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..common.validators import require_date_range
from ..core.exceptions import ValidationError
from .model import DailySummary
from .repository import SummaryRepository


class SummaryService:
    def __init__(self, summaries: SummaryRepository):
        self._summaries = summaries

    def get_daily_summary(self, employee_id: int, work_date: date) -> Optional[DailySummary]:
        """Summary of the shift that started on ``work_date``; None means no report for that day."""
        return self._summaries.get_summary(employee_id, work_date)

    def get_summaries(self, employee_id: int, start: date, end: date) -> Sequence[DailySummary]:
        require_date_range(start, end)
        return self._summaries.query_summaries(start_date=start, end_date=end, employee_id=employee_id)

    def get_monthly_summaries(self, employee_id: int, year: int, month: int) -> Sequence[DailySummary]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("month must be between 1 and 12")
        start, end = month_bounds(int(year), int(month))
        return self.get_summaries(employee_id, start, end)
