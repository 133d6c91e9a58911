from datetime import datetime

import mysql.connector.errors as mysql_errors
import pytest
import pytz

from src.timeclock.timeclock.core.exceptions import ConflictError, StoreUnavailableError
from src.timeclock.timeclock.database.mysql_base import from_db_datetime, to_db_datetime, translate_store_errors


def test_duplicate_predecessor_is_a_conflict():
    with pytest.raises(ConflictError):
        with translate_store_errors():
            raise mysql_errors.IntegrityError(msg="Duplicate entry '1-0'", errno=1062)


@pytest.mark.parametrize(
    "error",
    [
        mysql_errors.OperationalError(msg="Lost connection to MySQL server", errno=2013),
        mysql_errors.InterfaceError(msg="Can't connect to MySQL server", errno=2003),
        mysql_errors.DatabaseError(msg="Lock wait timeout exceeded", errno=1205),
        mysql_errors.InternalError(msg="Deadlock found when trying to get lock", errno=1213),
        mysql_errors.ProgrammingError(msg="You have an error in your SQL syntax", errno=1064),
    ],
)
def test_other_driver_errors_are_store_unavailable(error):
    with pytest.raises(StoreUnavailableError) as exc:
        with translate_store_errors():
            raise error
    assert exc.value.__cause__ is error


def test_non_driver_errors_pass_through():
    with pytest.raises(ValueError):
        with translate_store_errors():
            raise ValueError("bad row")


def test_datetime_columns_hold_naive_utc():
    berlin = pytz.timezone("Europe/Berlin").localize(datetime(2026, 2, 2, 17, 0))

    stored = to_db_datetime(berlin)

    assert stored == datetime(2026, 2, 2, 16, 0)
    assert from_db_datetime(stored) == datetime(2026, 2, 2, 16, 0, tzinfo=pytz.UTC)
