"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_MIN_CLOCK_INTERVAL_HOURS = 6.0
MAX_GRACE_PERIOD_MINUTES = 1440
MAX_MIN_CLOCK_INTERVAL_HOURS = 24.0

DEFAULT_SHIFT_START = (9, 0)
DEFAULT_GEOFENCE_RADIUS_METERS = 100.0
EARTH_RADIUS_METERS = 6_371_000.0

# Synthesized absences for "today" only appear once the nominal shift is over.
SHIFT_END_CUTOFF_MINUTES = 17 * 60

SYSTEM_CONFIG_KEY = "attendance_settings"
DEFAULT_LOCK_TIMEOUT_SECONDS = 10
DEFAULT_DB_TIMEOUT_SECONDS = 10
