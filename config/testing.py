import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worksite_ledger_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SYNC_SUPPRESS_SECONDS = 0.0
REMOTE_PAGE_SIZE = 1000
REALTIME_POLL_SECONDS = 0

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
