"""Numeric constants for load prescription and block progression."""

# Exertion scale
MIN_EXERTION = 6
MAX_EXERTION = 10
FALLBACK_EXERTION = 8
EXERTION_STEP = 0.5

# Repetition range covered by the RPE table
MIN_REPS = 1
MAX_REPS = 10

# Epley-style one-rep-max extrapolation
EPLEY_COEFFICIENT = 0.0333

# Peaking block
BUILD_WEEK_EXERTION_CAP = 9.0
PEAK_WEEK_EXERTION = 9.5
DELOAD_SET_MULTIPLIER = 0.7
PEAK_SET_MULTIPLIER = 0.5
MIN_SET_COUNT = 1
MIN_WEEKS_FOR_DELOAD = 3

# Per-set coloring: |actual - target|
ON_TARGET_TOLERANCE = 0.5
MODERATE_DEVIATION_TOLERANCE = 1.5

# Underperformance warning: target - actual
UNDERPERFORMANCE_WARNING_GAP = 2.0

# Session feedback: actual - target
PUSHED_THRESHOLD = 2.0
UNDERPERFORMED_THRESHOLD = -2.0
SEVERE_UNDERPERFORMANCE_RATIO = 0.5
MILD_UNDERPERFORMANCE_MAX_SETS = 2
