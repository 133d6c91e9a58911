from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import StatusColor
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailySummary
from .repository import SummaryRepository


def _to_summary(row: dict) -> DailySummary:
    return DailySummary(
        employee_id=int(row["employee_id"]),
        date=row["date"],
        total_work_minutes=int(row["total_work_minutes"]),
        total_break_minutes=int(row["total_break_minutes"]),
        is_late=bool(row["is_late"]),
        under_hours=bool(row["under_hours"]),
        status_color=StatusColor(row["status_color"]),
    )


class MySQLSummaryRepository(SummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_summary(
                    employee_id, date, total_work_minutes, total_break_minutes,
                    is_late, under_hours, status_color
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    total_work_minutes=VALUES(total_work_minutes),
                    total_break_minutes=VALUES(total_break_minutes),
                    is_late=VALUES(is_late),
                    under_hours=VALUES(under_hours),
                    status_color=VALUES(status_color)
                """,
                (
                    int(employee_id),
                    work_date,
                    int(total_work_minutes),
                    int(total_break_minutes),
                    int(bool(is_late)),
                    int(bool(under_hours)),
                    status_color.value,
                ),
            )

        return DailySummary(
            employee_id=int(employee_id),
            date=work_date,
            total_work_minutes=int(total_work_minutes),
            total_break_minutes=int(total_break_minutes),
            is_late=bool(is_late),
            under_hours=bool(under_hours),
            status_color=status_color,
        )

    def get_summary(self, employee_id: int, work_date: date) -> Optional[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, date, total_work_minutes, total_break_minutes,
                       is_late, under_hours, status_color
                FROM daily_summary
                WHERE employee_id=%s AND date=%s
                """,
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return _to_summary(row) if row else None

    def query_summaries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[DailySummary]:
        clauses = ["date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, date, total_work_minutes, total_break_minutes,
                       is_late, under_hours, status_color
                FROM daily_summary
                WHERE {where}
                ORDER BY date ASC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_summary(r) for r in fetchall(cur)]
