import os

COMPANY_ID = os.getenv("COMPANY_ID", "demo-company")
PLAN = os.getenv("PLAN", "free")

CLOCK_IN_GRACE_MINUTES = int(os.getenv("CLOCK_IN_GRACE_MINUTES", "10"))
AUTO_CLOCK_OUT_AFTER_MINUTES = int(os.getenv("AUTO_CLOCK_OUT_AFTER_MINUTES", "30"))
AUTO_CLOCK_OUT_INTERVAL_SECONDS = int(os.getenv("AUTO_CLOCK_OUT_INTERVAL_SECONDS", "60"))
INBOX_POLL_INTERVAL_SECONDS = int(os.getenv("INBOX_POLL_INTERVAL_SECONDS", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
