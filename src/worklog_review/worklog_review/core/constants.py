"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DESCRIPTION_MIN_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 1000
BLOCKERS_MAX_LENGTH = 500
MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 960

REWORK_COMMENT_MIN_LENGTH = 10
DEFAULT_APPROVE_COMMENT = "Approved"

REVIEW_SLA_HOURS = 48
URGENT_WINDOW_HOURS = 2

WEEKLY_TARGET_MINUTES = 2400
DEFAULT_HISTORY_WEEKS = 12
