from datetime import date

import pytest

from src.timeclock.timeclock.core.exceptions import ValidationError
from src.timeclock.timeclock.summaries.service import SummaryService


@pytest.fixture
def service(summary_store, make_summary_factory):
    for day, work in [(date(2026, 1, 31), 480), (date(2026, 2, 1), 300), (date(2026, 2, 28), 500), (date(2026, 3, 1), 480)]:
        s = make_summary_factory(1, day, work)
        summary_store.by_key[(s.employee_id, s.date)] = s
    other = make_summary_factory(2, date(2026, 2, 10), 480)
    summary_store.by_key[(other.employee_id, other.date)] = other
    return SummaryService(summary_store)


def test_monthly_summaries_cover_whole_month(service):
    items = service.get_monthly_summaries(1, 2026, 2)

    assert [s.date for s in items] == [date(2026, 2, 1), date(2026, 2, 28)]


def test_december_bounds(service, summary_store, make_summary_factory):
    s = make_summary_factory(1, date(2025, 12, 31), 480)
    summary_store.by_key[(1, s.date)] = s

    assert [x.date for x in service.get_monthly_summaries(1, 2025, 12)] == [date(2025, 12, 31)]


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month_rejected(service, month):
    with pytest.raises(ValidationError):
        service.get_monthly_summaries(1, 2026, month)


def test_range_is_inclusive_and_per_employee(service):
    items = service.get_summaries(1, date(2026, 2, 1), date(2026, 3, 1))

    assert [s.date for s in items] == [date(2026, 2, 1), date(2026, 2, 28), date(2026, 3, 1)]
    assert all(s.employee_id == 1 for s in items)


def test_reversed_range_rejected(service):
    with pytest.raises(ValidationError):
        service.get_summaries(1, date(2026, 3, 1), date(2026, 2, 1))


def test_daily_summary_missing_is_none(service):
    assert service.get_daily_summary(1, date(2026, 2, 2)) is None
    assert service.get_daily_summary(1, date(2026, 2, 1)).total_work_minutes == 300
