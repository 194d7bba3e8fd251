import math

# Magnitudes below this are treated as zero (matches the host's ZeroTolerance, 2**-32).
ZERO_TOLERANCE = 2.3283064365386963e-10

# Document defaults used when no tolerances are supplied
DEFAULT_ABSOLUTE_TOLERANCE = 0.001
DEFAULT_ANGLE_TOLERANCE = math.radians(1.0)

DEFAULT_DISTANCE = 1.0

# Samples used when a curve is reduced to points (normal estimation, previews)
CURVE_SAMPLES = 64

WORLD_UP = (0.0, 0.0, 1.0)
