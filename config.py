"""
Configuration for the service counter simulation.
"""

# ============================================================================
# CAPACITY
# ============================================================================

MAX_WINDOWS = 20  # size of the window pool
MAX_CUSTOMERS = 1000  # customers accepted by a single run

# ============================================================================
# DEFAULT PARAMETERS
# ============================================================================

INITIAL_WINDOWS = 3
MAX_OPEN_WINDOWS = 5
MIN_OPEN_WINDOWS = 2
OPEN_THRESHOLD = 5  # combined queue length above which a window opens
CLOSE_THRESHOLD = 2  # combined queue length below which a window closes
PRIORITY_RATIO = 0.7  # chance of serving the priority queue under contention
SIMULATION_TIME = 480.0  # 8 hours in minutes
CUSTOMER_COUNT = 50

# ============================================================================
# DEMO MODE
# ============================================================================

DEMO_INITIAL_WINDOWS = 2
DEMO_MAX_WINDOWS = 4
DEMO_MIN_WINDOWS = 1
DEMO_OPEN_THRESHOLD = 3
DEMO_CLOSE_THRESHOLD = 1
DEMO_PRIORITY_RATIO = 0.7
DEMO_SIMULATION_TIME = 120.0  # 2 hours in minutes
DEMO_CUSTOMER_COUNT = 20
DEMO_SEED = 12345

# ============================================================================
# MODEL COMPARISON
# ============================================================================

COMPARISON_CUSTOMER_COUNT = 30
COMPARISON_SEED = 1001

# ============================================================================
# CUSTOMER GENERATOR
# ============================================================================

ARRIVAL_RATE = 2.0  # customers/min
SERVICE_RATE = 3.0  # services/min (exponential)
PRIORITY_SHARE = 0.30  # fraction of priority customers
VIP_LEVELS = (1, 2, 3)  # tiers drawn for priority customers
MIN_SERVICE_TIME = 0.5  # minutes
MAX_SERVICE_TIME = 10.0  # minutes

# ============================================================================
# STATISTICS
# ============================================================================

# Simulated time is in minutes; throughput is reported per hour
THROUGHPUT_SCALE = 60.0

# ============================================================================
# OUTPUT
# ============================================================================

OUTPUT_DIR = "outputs"
LOG_DIR = f"{OUTPUT_DIR}/logs"
PLOT_DIR = f"{OUTPUT_DIR}/plots"
REPORT_DIR = f"{OUTPUT_DIR}/reports"

# CSV event log columns
EVENT_LOG_COLUMNS = [
    "timestamp",
    "event_type",  # "window_open", "window_close", "arrival", "service_start", "service_end"
    "customer_id",
    "customer_class",
    "window_id",
    "waiting_time",  # service_start only
    "service_time",  # arrival (estimate) and service_end (actual)
    "queue_length",
    "active_windows",
]
