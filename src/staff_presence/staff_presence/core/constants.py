"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_WAIT_MIN = 0.1
DEFAULT_RETRY_WAIT_MAX = 2.0

DEFAULT_POSTING_MINUTES = 30
MAX_POSTING_MINUTES = 24 * 60
DEFAULT_RECENT_POSTINGS_LIMIT = 5

HOURS_PRECISION = 1
