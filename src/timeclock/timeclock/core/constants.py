"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Business day runs 06:00 -> 05:59:59.999 in the reference timezone (JST).
DEFAULT_UTC_OFFSET_HOURS = 9
DEFAULT_DAY_START_HOUR = 6

DEFAULT_SESSION_DAYS = 30
DEFAULT_NOTIFY_TIMEOUT_SECONDS = 10
MIN_PASSWORD_LENGTH = 6

NOTIFICATION_FOOTER = "Timeclock"
