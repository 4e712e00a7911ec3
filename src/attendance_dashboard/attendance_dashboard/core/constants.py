"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
UNKNOWN_DAY = "Unknown"

DEFAULT_EARLY_ARRIVAL_LIMIT = 3
DEFAULT_ANALYTICS_DAYS = 30
DEFAULT_DEPARTMENT = "General"
