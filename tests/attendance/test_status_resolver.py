import logging
from datetime import datetime, timedelta

import pytz

from src.timeclock.timeclock.attendance.status import StatusResolver
from src.timeclock.timeclock.core.enums import ActionType, WorkState


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=pytz.UTC)


def test_empty_history_is_off(action_log, fixed_now):
    status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.OFF
    assert status.is_working is False
    assert status.is_on_break is False
    assert status.last_action is None
    assert status.start_work_time is None
    assert status.last_log_id == 0


def test_working_status_anchored_on_latest_start_work(action_log, fixed_now):
    action_log.add(1, ActionType.START_WORK, fixed_now - timedelta(hours=3))
    action_log.add(1, ActionType.START_BREAK, fixed_now - timedelta(hours=2))
    last = action_log.add(1, ActionType.END_BREAK, fixed_now - timedelta(hours=1))

    status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.WORKING
    assert status.last_action == ActionType.END_BREAK
    assert status.start_work_time == fixed_now - timedelta(hours=3)
    assert status.last_log_id == last.log_id
    assert status.anchor_fallback is False


def test_on_break_status(action_log, fixed_now):
    action_log.add(1, ActionType.START_WORK, fixed_now - timedelta(hours=1))
    action_log.add(1, ActionType.START_BREAK, fixed_now - timedelta(minutes=5))

    status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.ON_BREAK
    assert status.is_on_break is True
    assert status.is_working is False


def test_end_work_means_off_with_no_anchor(action_log, fixed_now):
    action_log.add(1, ActionType.START_WORK, fixed_now - timedelta(hours=9))
    action_log.add(1, ActionType.END_WORK, fixed_now - timedelta(hours=1))

    status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.OFF
    assert status.last_action == ActionType.END_WORK
    assert status.start_work_time is None


def test_shift_started_before_midnight_keeps_status(action_log):
    action_log.add(1, ActionType.START_WORK, utc(2024, 1, 1, 23, 30))
    now = utc(2024, 1, 2, 0, 45)

    status = StatusResolver(action_log).resolve(1, now=now)

    assert status.state == WorkState.WORKING
    assert status.start_work_time == utc(2024, 1, 1, 23, 30)


def test_status_follows_last_record_however_old(action_log, fixed_now):
    action_log.add(1, ActionType.START_WORK, fixed_now - timedelta(days=40))
    action_log.add(1, ActionType.START_BREAK, fixed_now - timedelta(days=39))

    status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.ON_BREAK


def test_missing_start_work_in_window_falls_back_with_warning(action_log, fixed_now, caplog):
    action_log.add(1, ActionType.START_WORK, fixed_now - timedelta(hours=30))
    last = action_log.add(1, ActionType.START_BREAK, fixed_now - timedelta(hours=2))

    with caplog.at_level(logging.WARNING):
        status = StatusResolver(action_log).resolve(1, now=fixed_now)

    assert status.state == WorkState.ON_BREAK
    assert status.start_work_time == last.timestamp
    assert status.anchor_fallback is True
    assert "no start_work within" in caplog.text


def test_other_employees_do_not_leak(action_log, fixed_now):
    action_log.add(2, ActionType.START_WORK, fixed_now - timedelta(hours=1))

    assert StatusResolver(action_log).resolve(1, now=fixed_now).state == WorkState.OFF
    assert StatusResolver(action_log).resolve(2, now=fixed_now).state == WorkState.WORKING
