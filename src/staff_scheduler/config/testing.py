COMPANY_ID = "test-company"
PLAN = "pro_plus"

CLOCK_IN_GRACE_MINUTES = 10
AUTO_CLOCK_OUT_AFTER_MINUTES = 30
AUTO_CLOCK_OUT_INTERVAL_SECONDS = 60
INBOX_POLL_INTERVAL_SECONDS = 60

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
