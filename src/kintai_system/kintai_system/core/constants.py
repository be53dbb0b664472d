"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

LATE_THRESHOLD = time(9, 0)
EARLY_LEAVE_THRESHOLD = time(18, 0)
DEFAULT_BREAK_MINUTES = 60

MAX_DAILY_EFFORT_HOURS = 8

ACCESS_TOKEN_HOURS = 24
REFRESH_TOKEN_DAYS = 7
JWT_ALGORITHM = "HS256"

DEFAULT_REPORT_LIST_LIMIT = 30
TAG_SEARCH_LIMIT = 50
MIN_PASSWORD_LENGTH = 6

NOTION_MAX_PAGES = 1000
NOTION_PAGE_SIZE = 100
NOTION_API_VERSION = "2022-06-28"
NOTION_TIMEOUT_SECONDS = 30

LAST_NOTION_SYNC_KEY = "last_notion_sync"
