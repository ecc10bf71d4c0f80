"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNKNOWN_COMPANY = "Unknown Company"
MIN_ENTRY_SECONDS = 1
DEFAULT_TICK_INTERVAL_MS = 100
ACCESS_CODE_LENGTH = 6

ADMIN_USER_ID = 0
ADMIN_NAME = "Super Admin"
ADMIN_TITLE = "System Administrator"

DEVICE_COOKIE = "timeos_device"
DEVICE_COOKIE_MAX_AGE = 365 * 24 * 3600
