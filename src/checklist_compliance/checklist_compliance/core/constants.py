"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_GEOFENCE_RADIUS_M = 50.0

DEFAULT_TREND_PERIOD = "month"
DEFAULT_TREND_MAX_WORKERS = 8

DEFAULT_LOW_COMPLIANCE_THRESHOLD = 80
DEFAULT_LOW_COMPLIANCE_LIMIT = 10
