"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_RECENT_DAYS = 7
MIN_PASSWORD_LENGTH = 6
MIN_STUDENT_YEAR = 1
MAX_STUDENT_YEAR = 4
