import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_reports_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REPORT_STORE = "memory"
ADJACENT_DAY_MODE = os.getenv("ADJACENT_DAY_MODE", "calendar")
MAX_UPLOAD_MB = 2

AUTO_INIT_DB = False
