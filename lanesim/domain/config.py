# Simulation Configuration

# Timing
DT = 0.01                # Fixed physics timestep (seconds)
TICK_INTERVAL = 0.01     # Wall-clock interval between ticks (seconds)

# Intelligent Driver Model
DESIRED_VELOCITY = 30.0
MINIMUM_SPACING = 7.5
DESIRED_TIME_HEADWAY = 1.5   # seconds
MAX_ACCELERATION = 4.0
COMFORT_DECELERATION = 6.0
ACCELERATION_EXPONENT = 4.0

# Lead Vehicle Control
LEAD_STOP_DECELERATION = -6.0
LEAD_START_ACCELERATION = 3.0

# Reaction-Time Model
HUMAN_REACTION_TIME = 0.25   # seconds
REACTION_ACCELERATION = 2.0

# Vehicles
DEFAULT_VEHICLE_LENGTH = 5.0
COLOR_CHANNEL_VALUES = (0.541, 0.803)

# Default Scenario
FOLLOWER_COUNT = 121
FOLLOWER_SPACING = 15.0
FOLLOWER_OFFSET = 300.0
FOLLOWER_TARGET_VELOCITY = 0.0
LEAD_START_POSITION = -285.0
LEAD_TARGET_VELOCITY = 30.0
