"""Scoring weights and model constants for the office sustainability engine.

The three eco-score components sum to 1.0.  Device wattages describe the
fixed power model used by the zone energy calculator.
"""

# ---------------------------------------------------------------------------
# Eco score components (must sum to 1.0)
# ---------------------------------------------------------------------------
DARK_MODE_WEIGHT = 0.4
UPTIME_WEIGHT = 0.3
ENERGY_WEIGHT = 0.3

UPTIME_TARGET_HOURS = 1.2        # Uptime component saturates here
ENERGY_REFERENCE_KWH = 0.05      # Consumption at which energy component hits 0

# ---------------------------------------------------------------------------
# Reward points
# ---------------------------------------------------------------------------
ECO_SCORE_NEUTRAL = 0.5          # Eco score that yields a zero delta
POINTS_PER_ECO_UNIT = 20
MAX_POINT_DELTA = 10
MIN_POINT_DELTA = -10

# ---------------------------------------------------------------------------
# Session consumption model
# ---------------------------------------------------------------------------
BASE_RATE_KWH_PER_HOUR = 0.05
DARK_MODE_FACTOR = 0.8
LOW_BATTERY_THRESHOLD = 20.0     # Percent

# ---------------------------------------------------------------------------
# Zone power model (watts)
# ---------------------------------------------------------------------------
LAPTOP_WATTS = 50
LIGHT_WATTS = 20                 # Per light in an "<N>x Lights" entry
AC_WATTS = 1000                  # Flat, regardless of unit count
FAN_WATTS = 100                  # Flat, regardless of unit count
CO2_KG_PER_KWH = 0.233

# ---------------------------------------------------------------------------
# Proximity
# ---------------------------------------------------------------------------
MAX_PROXIMITY_SCORE = 100.0
