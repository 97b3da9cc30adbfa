"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Output sentinels kept verbatim for stored reports and exports.
MISSING_TIME = "-"
UNSCHEDULED = "-"
NOT_AVAILABLE = "N/A"

# Department labels. The night-shift correction and the shift scheduler use
# different spellings; they are intentionally not unified.
NIGHT_SHIFT_DEPARTMENT = "OPERATION"
OPERATIONS_DEPARTMENT = "Operations"
ID_DEPARTMENT = "ID"

ID_SCHEDULED_START_TIME = "08:00:00"
OPERATIONS_GRACE_PERIOD_MINUTES = 30
SHIFT_INFERENCE_RADIUS_MINUTES = 180

# Hour thresholds used by the overnight correction.
EARLY_ARRIVAL_BEFORE_HOUR = 8
NIGHT_SHIFT_FROM_HOUR = 16
NIGHT_SHIFT_TAIL_BEFORE_HOUR = 10
EVENING_SHIFT_FROM_HOUR = 18

ADJACENT_DAY_CALENDAR = "calendar"
ADJACENT_DAY_NAIVE = "naive"

DEFAULT_MAX_UPLOAD_MB = 10
ALLOWED_UPLOAD_EXTENSIONS = (".xlsx", ".xls", ".csv")
