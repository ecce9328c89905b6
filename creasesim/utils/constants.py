"""
Physics constants, field defaults and calibration thresholds for CreaseSim.

Ball properties are those of a men's match ball under the Laws of Cricket.
Timing thresholds are calibrated so that a typical pair of batsmen complete
a single in just under four seconds on a standard 20.12 m pitch.
"""

import math

# =============================================================================
# Ball Physics Constants
# =============================================================================

# Air properties at sea level
AIR_DENSITY = 1.225            # kg/m³
GRAVITY = 9.81                 # m/s²

# Cricket ball properties
BALL_MASS = 0.156              # kg (5.5 oz)
BALL_RADIUS = 0.036            # m (~22.6 cm circumference)
BALL_CROSS_SECTION = math.pi * BALL_RADIUS ** 2  # m²
AIR_DRAG_COEFFICIENT = 0.35    # Cd for a worn leather ball

# Integrator settings
DEFAULT_TIME_STEP = 0.02       # seconds
MAX_SIMULATION_TIME = 12.0     # seconds

# =============================================================================
# Bounce and Roll
# =============================================================================

SURFACE_DAMPING = 0.82         # Horizontal speed retained through a bounce
SPIN_DECAY = 0.1               # Extra horizontal loss per unit spin influence
BOUNCE_VERTICAL_THRESHOLD = 1.2  # m/s, below this a bounce turns into a roll
MIN_ROLLING_SPEED = 0.4        # m/s, ball considered stopped below this
ROLL_DECAY_SCALE = 1.15        # Applied on top of the outfield friction

# Spin influence saturates at these values
SPIN_REFERENCE_RPM = 3000.0
SPIN_REFERENCE_SPEED = 50.0    # m/s

# =============================================================================
# Field Defaults
# =============================================================================

DEFAULT_BOUNDARY_RADIUS = 65.0       # m
DEFAULT_PITCH_LENGTH = 20.12         # m (22 yards)
DEFAULT_INNER_CIRCLE_RADIUS = 27.43  # m (30 yards)
DEFAULT_ROPE_HEIGHT = 0.7            # m, ball above this at the rope is a six
DEFAULT_BOUNCE_ENERGY_RETENTION = 0.55

# Outfield friction coefficients (exponential speed decay per second)
FRICTION_COEFFICIENTS = {
    "slow":    0.65,
    "average": 0.55,
    "fast":    0.45,
}

DEFAULT_LAUNCH_HEIGHT = 1.0    # m, bat contact point
MAX_ELEVATION = 60.0           # degrees

# =============================================================================
# Fielding
# =============================================================================

RUN_SPEED_FLOOR = 3.2          # m/s, slowest a fielder is assumed to move
MAX_AIR_HEIGHT_FOR_CHASE = 1.2  # m, flight samples above this can't be fielded
DEFAULT_INTERCEPT_BUFFER = 0.1  # s, added on top of a fielder's pickup buffer
AIR_CATCH_RADIUS = 2.5         # m
BOUNCE_CATCH_RADIUS = 3.0      # m, diving catch off the first bounce

# Two samples closer than this are the same point; stops the intercept
# splice from emitting a duplicate terminal sample.
SPLICE_EPSILON = 1e-6          # m

# =============================================================================
# Running Between the Wickets
# =============================================================================

TURN_BUFFER = 0.75             # s, grounding the bat and turning
AGGRESSIVE_RUN_MARGIN = 0.6    # s, safety margin per extra run
MAX_RUNNING_SPEED = 8.1        # m/s, cap on any batsman's speed
DEFAULT_RUNNER_SPEED = 6.2     # m/s, used when no batsmen are supplied
MAX_RUNNING_RUNS = 3
