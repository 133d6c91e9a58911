import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

ATTENDANCE_POLICY = {
    "work_weekdays": "0,1,2,3,4",
    "work_start_hour": 15,
    "full_shift_minutes": 480,
    "timezone": "UTC",
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
