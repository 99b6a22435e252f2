"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Locations without an hours table are treated as open 8 hours a day.
DEFAULT_GROSS_HOURS = 8.0
DEFAULT_BREAK_MINUTES = 30
DEFAULT_LUNCH_MINUTES = 45
DEFAULT_PADDING_MINUTES = 10
DEFAULT_STYLIST_CAPACITY = 1

# Fallback when an appointment has no usable start/end time.
DEFAULT_APPOINTMENT_HOURS = 1.0

EXCLUDED_CAPACITY_STATUSES = ("cancelled", "no_show")

DEFAULT_MEETING_CADENCE_DAYS = 14
DUE_SOON_WINDOW_DAYS = 3
QUALIFYING_MEETING_TYPES = ("coaching", "check_in")
MIN_CADENCE_DAYS = 1
MAX_CADENCE_DAYS = 365

DEFAULT_KIOSK_IDLE_SECONDS = 60
MIN_PHONE_DIGITS = 7

DEFAULT_STAFFING_UNDER_RATIO = 0.90
DEFAULT_STAFFING_OVER_RATIO = 0.50
DEFAULT_STAFFING_TARGET_RATIO = 0.75

HOURS_PER_PAY_PERIOD = 80
PAY_PERIODS_PER_YEAR = 26
ESTIMATED_TAX_RATE = 0.35
