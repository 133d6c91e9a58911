from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ActionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import ActionRecord
from .repository import ActionLogRepository


def _to_record(row: dict) -> ActionRecord:
    return ActionRecord(
        log_id=int(row["log_id"]),
        employee_id=int(row["employee_id"]),
        action_type=ActionType(row["action_type"]),
        timestamp=from_db_datetime(row["timestamp"]),
    )


class MySQLActionLogRepository(ActionLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        employee_id: int,
        action_type: ActionType,
        timestamp: datetime,
        after_id: int = 0,
    ) -> ActionRecord:
        # uq_attendance_logs_predecessor turns a lost race into IntegrityError -> ConflictError
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(employee_id, action_type, timestamp, after_id)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), action_type.value, to_db_datetime(timestamp), int(after_id)),
            )
            log_id = int(cur.lastrowid)

        return ActionRecord(
            log_id=log_id,
            employee_id=int(employee_id),
            action_type=action_type,
            timestamp=from_db_datetime(to_db_datetime(timestamp)),
        )

    def query_range(
        self,
        employee_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> Sequence[ActionRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start is not None:
            clauses.append("timestamp >= %s")
            params.append(to_db_datetime(start))
        if end is not None:
            clauses.append("timestamp <= %s")
            params.append(to_db_datetime(end))

        where = " AND ".join(clauses)
        order = "DESC" if descending else "ASC"
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT log_id, employee_id, action_type, timestamp
                FROM attendance_logs
                WHERE {where}
                ORDER BY timestamp {order}, log_id {order}
                {limit_sql}
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def most_recent(self, employee_id: int) -> Optional[ActionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, employee_id, action_type, timestamp
                FROM attendance_logs
                WHERE employee_id=%s
                ORDER BY timestamp DESC, log_id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_by_id(self, log_id: int) -> Optional[ActionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, employee_id, action_type, timestamp
                FROM attendance_logs
                WHERE log_id=%s
                """,
                (int(log_id),),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None
