import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worksite_ledger"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SYNC_SUPPRESS_SECONDS = float(os.getenv("SYNC_SUPPRESS_SECONDS", "2.0"))
REMOTE_PAGE_SIZE = int(os.getenv("REMOTE_PAGE_SIZE", "1000"))
REALTIME_POLL_SECONDS = float(os.getenv("REALTIME_POLL_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
