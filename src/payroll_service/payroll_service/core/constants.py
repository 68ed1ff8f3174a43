"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Grace period under the shift length that still counts as a full day.
BUFFER_MINUTES = 15
# Minimum overtime that qualifies for one paid overtime hour.
MIN_OT_MINUTES = 60
OT_MULTIPLIER = 1.5

STANDARD_DAYS_IN_MONTH = 30
DEFAULT_SHIFT_MINUTES = 540
DEFAULT_HOURLY_SHIFT_HOURS = 9
DEFAULT_HISTORY_DAYS = 30

PAYOUT_PIN_LENGTH = 4

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
