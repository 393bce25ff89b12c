"""
Drone Route Planner Configuration
Defines flight defaults, energy model constants, pattern parameters, and service settings
"""

# ============================================================================
# FLIGHT DEFAULTS
# ============================================================================

DEFAULT_CRUISE_SPEED = 15.0  # m/s horizontal (approximately 54 km/h)
DEFAULT_CLIMB_SPEED = 5.0    # m/s vertical reference
DEFAULT_WAYPOINT_ALTITUDE = 30.0  # meters for hand-placed waypoints

# ============================================================================
# EARTH MODEL
# ============================================================================
# Spherical earth approximations, no geodesic correction

EARTH_RADIUS = 6371000.0          # meters
METERS_PER_DEGREE_LAT = 110540.0  # fixed
METERS_PER_DEGREE_LNG_EQUATOR = 111320.0  # scaled by cos(latitude)

# ============================================================================
# ENERGY MODEL (4-inch long range quad)
# ============================================================================

CRUISE_CURRENT = 5.5        # Amps in level flight (4.5A - 6A)
CLIMB_CURRENT = 13.5        # Amps in a hard climb (12A - 15A)
IDLE_DESCENT_CURRENT = 2.0  # Amps descending, motors near idle
CLIMB_PENALTY_FACTOR = 0.40     # 40% extra when climbing near the limit
CLIMB_PENALTY_EFFORT = 0.8      # effort above which the penalty applies
VERTICAL_RATE_DEADBAND = 0.5    # m/s, |rate| at or below is level flight
ALTITUDE_PENALTY_PER_100M = 0.01  # 1% extra current per 100m mean altitude
MIN_SEGMENT_TIME = 0.1      # seconds

# Battery status thresholds (percentage of capacity consumed, exclusive)
BATTERY_WARNING_PERCENT = 50.0
BATTERY_CRITICAL_PERCENT = 80.0
BATTERY_CRASH_PERCENT = 100.0

# ============================================================================
# CURVE SAMPLING
# ============================================================================

CURVE_STEPS_PER_SEGMENT = 20  # t = 0, 0.05, ..., 1.0 -> 21 samples

# ============================================================================
# PATTERN PARAMETERS
# ============================================================================

DEFAULT_PATTERN_RADIUS = 80.0     # meters
DEFAULT_PATTERN_POINTS = 16       # shape points before loop multipliers
DEFAULT_PATTERN_START_ALTITUDE = 30.0
DEFAULT_PATTERN_END_ALTITUDE = 80.0

SPIRAL_LOOPS = 3
SPIRAL_MIN_RADIUS_RATIO = 0.4   # inner radius as a fraction of the input radius
FIGURE8_LOOP_MULTIPLIER = 2
FIGURE8_LATERAL_RATIO = 0.5
OVAL_LAT_RATIO = 0.6            # north-south foreshortening

# ============================================================================
# SEVERITY COLORS
# ============================================================================

SEVERITY_GREEN = (34, 197, 94)
SEVERITY_ORANGE = (249, 115, 22)
SEVERITY_RED = (239, 68, 68)
NEUTRAL_LEVEL = 0.5  # flat routes render mid color

# ============================================================================
# BATTERY PROFILES
# ============================================================================

BATTERY_PROFILES = [
    {
        'id': 'lihv-850',
        'name': 'LiHV 850mAh 4S',
        'chemistry': 'LiHV',
        'capacity_mah': 850,
        'nominal_voltage': 15.2,
        'cell_count': 4,
        'max_discharge_a': 60,
    },
    {
        'id': 'liion-3000',
        'name': 'Li-ion 3000mAh 4S',
        'chemistry': 'Li-ion',
        'capacity_mah': 3000,
        'nominal_voltage': 14.4,
        'cell_count': 4,
        'max_discharge_a': 30,
    },
]

# ============================================================================
# SIMULATION PARAMETERS
# ============================================================================

SIMULATION_PROGRESS_RATE = 0.05  # route fraction per second at 1x speed
TELEMETRY_UPDATE_RATE = 2.0      # Hz (frames per second)
LOW_BATTERY_WARNING = 20.0       # percent remaining
LOW_BATTERY_EMERGENCY = 10.0     # percent remaining

# ============================================================================
# API CONFIGURATION
# ============================================================================

API_HOST = "127.0.0.1"
API_PORT = 8000
CORS_ORIGINS = ["*"]  # Allow all origins for development

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
