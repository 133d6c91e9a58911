"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORK_WEEKDAYS = (0, 1, 2, 3, 4)  # Monday..Friday, datetime.weekday()
DEFAULT_WORK_START_HOUR = 15
DEFAULT_FULL_SHIFT_MINUTES = 480
DEFAULT_TIMEZONE = "UTC"

DEFAULT_SCAN_LIMIT = 20
DEFAULT_STATUS_LOOKBACK_HOURS = 24
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
