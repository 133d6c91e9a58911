from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import mysql.connector.errors as mysql_errors
import pytz

from ..core.exceptions import ConflictError, StoreUnavailableError
from .connection import DatabaseConnection


@contextmanager
def translate_store_errors():
    """Map mysql-connector exception types onto the store error taxonomy."""

    try:
        yield
    except mysql_errors.IntegrityError as e:
        raise ConflictError(str(e)) from e
    except (mysql_errors.InterfaceError, mysql_errors.OperationalError) as e:
        raise StoreUnavailableError(str(e)) from e
    except mysql_errors.Error as e:
        # lock wait timeouts and deadlocks arrive as plain DatabaseError / InternalError
        raise StoreUnavailableError(str(e)) from e


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    with translate_store_errors():
        conn = conn_factory.connect()
        try:
            cur = conn.cursor(dictionary=dictionary)
            try:
                yield conn, cur
                conn.commit()
            finally:
                cur.close()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: datetime) -> datetime:
    """DATETIME columns hold naive UTC values."""
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.UTC).replace(tzinfo=None)


def from_db_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)
