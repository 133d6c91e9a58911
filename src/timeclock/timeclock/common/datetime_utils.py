from __future__ import annotations

from datetime import date, datetime

import pytz


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current UTC time (timezone-aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def to_local(dt: datetime, timezone_name: str) -> datetime:
    return ensure_utc(dt).astimezone(pytz.timezone(timezone_name))


def local_date(dt: datetime, timezone_name: str) -> date:
    """Calendar date of an instant in the given reference timezone."""
    return to_local(dt, timezone_name).date()


def local_day_bounds(day: date, timezone_name: str) -> tuple[datetime, datetime]:
    """UTC [start, end) bounds of a local calendar day."""
    tz = pytz.timezone(timezone_name)
    start = tz.localize(datetime(day.year, day.month, day.day))
    next_day = date.fromordinal(day.toordinal() + 1)
    end = tz.localize(datetime(next_day.year, next_day.month, next_day.day))
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last date of a calendar month."""
    first = date(year, month, 1)
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date.fromordinal(date(year, month + 1, 1).toordinal() - 1)
    return first, last


def format_minutes(minutes: int) -> str:
    """Render a minute count as HH:MM."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
