import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worksite_ledger"),
}

DEBUG = True

# 시작 시 테이블 생성 (CREATE TABLE IF NOT EXISTS, 여러 번 실행해도 안전)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# 저장 직후 이 시간(초) 동안 원격 변경 이벤트 무시
SYNC_SUPPRESS_SECONDS = float(os.getenv("SYNC_SUPPRESS_SECONDS", "2.0"))
REMOTE_PAGE_SIZE = int(os.getenv("REMOTE_PAGE_SIZE", "1000"))
# 0 이면 변경 감지 폴링을 하지 않음
REALTIME_POLL_SECONDS = float(os.getenv("REALTIME_POLL_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
