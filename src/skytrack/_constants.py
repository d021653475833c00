"""Internal constants shared across the library."""

API_URL = "https://opensky-network.org/api/states/all"
USER_AGENT = "skytrack/0 (+aiohttp)"

#: Seconds between automatic refresh cycles.
UPDATE_INTERVAL: float = 15.0

# ------------------------------------------------------------------
# Unit conversions applied at normalization
# ------------------------------------------------------------------

METERS_TO_FEET = 3.28084
MPS_TO_MPH = 2.23694
MPS_TO_FEET_PER_MINUTE = 196.85

# ------------------------------------------------------------------
# Trails
# ------------------------------------------------------------------

TRAIL_MAX_POINTS = 20
TRAIL_TTL_SECONDS: float = 60.0

# ------------------------------------------------------------------
# Default filter bounds (feet / mph)
# ------------------------------------------------------------------

DEFAULT_MIN_ALTITUDE_FT: float = 0.0
DEFAULT_MAX_ALTITUDE_FT: float = 50_000.0
DEFAULT_MIN_SPEED_MPH: float = 0.0
DEFAULT_MAX_SPEED_MPH: float = 700.0

#: Category label used for aircraft without an origin country.
UNKNOWN_CATEGORY = "Unknown"

#: Placeholder shown for absent values in display strings.
NOT_AVAILABLE = "N/A"
