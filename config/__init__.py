import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; defaults to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def attendance_policy_from_env() -> dict:
    """Attendance policy knobs shared by every settings module."""
    return {
        "work_weekdays": os.getenv("WORK_WEEKDAYS", "0,1,2,3,4"),
        "work_start_hour": int(os.getenv("WORK_START_HOUR", "15")),
        "full_shift_minutes": int(os.getenv("FULL_SHIFT_MINUTES", "480")),
        "timezone": os.getenv("TIMEZONE", "UTC"),
        "scan_limit": int(os.getenv("SHIFT_SCAN_LIMIT", "20")),
        "status_lookback_hours": int(os.getenv("STATUS_LOOKBACK_HOURS", "24")),
        "lateness_rule": os.getenv("LATENESS_RULE", "never"),
        "late_cutoff": os.getenv("LATE_CUTOFF", ""),
        "late_grace_minutes": int(os.getenv("LATE_GRACE_MINUTES", "0")),
    }
