"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WITHHOLDING_TAX_RATE = 0.033
DEFAULT_DAILY_WAGE = 150000
DAILY_RATE_ROUNDING = 100

REMOTE_PAGE_SIZE = 1000
SYNC_SUPPRESS_SECONDS = 2.0
MAX_NOTICES = 50
RECENT_LIMIT = 5

UNASSIGNED_SITE_NAME = "미지정"
DEFAULT_EXPENSE_CATEGORY = "기타"
EXPENSE_CATEGORIES = ("아침", "점심", "저녁", "주유", "숙박", "자재", "기타")
