"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_SECTIONS = ("CS-301", "IT-501", "EC-101")
DEFAULT_SECTION = "CS-301"
DEFAULT_HISTORY_LIMIT = 100
MIN_PASSWORD_LENGTH = 6
MINUTES_PER_DAY = 24 * 60
