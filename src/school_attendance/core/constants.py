"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_RECORDS_PER_MARK = 200
LOW_ATTENDANCE_THRESHOLD = 75
DEFAULT_TOKEN_TTL_HOURS = 24
TOKEN_COOKIE_NAME = "token"
MAX_NAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 8
MAX_BODY_BYTES = 50 * 1024
