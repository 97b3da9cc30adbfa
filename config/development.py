import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_reports"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# 'mysql' keeps reports across restarts, 'memory' is process-local
REPORT_STORE = os.getenv("REPORT_STORE", "mysql")

# 'calendar' or 'naive' (day-string increment, no month rollover)
ADJACENT_DAY_MODE = os.getenv("ADJACENT_DAY_MODE", "calendar")

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
