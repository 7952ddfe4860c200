"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CLOCK_IN_GRACE_MINUTES = 10
DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES = 30
DEFAULT_AUTO_CLOCK_OUT_INTERVAL_SECONDS = 60
DEFAULT_INBOX_POLL_INTERVAL_SECONDS = 60

DAYS_PER_WEEK = 7
MONTH_GRID_DAYS = 42

ACCESS_CODE_MIN = 100000
ACCESS_CODE_MAX = 999999

DEFAULT_EMPLOYEE_ROLE = "Unassigned"
DEFAULT_EMPLOYEE_GENDER = "Prefer not to say"

UPCOMING_ITEMS_LIMIT = 5
DEFAULT_UNDO_DEPTH = 50
