from __future__ import annotations

import math

# Simulation time scale: 1 s of real time => 8 h of simulated time
TIME_FACTOR_DEFAULT: float = 8.0 * math.pi * 2.0

HOURS_PER_DAY: float = 24.0

DEG_TO_RAD: float = math.pi / 180.0

# Raw radii (km) are divided by this to fit render space
DISTANCE_SCALE_KM: float = 1.0e6

# Newton-Raphson settings for Kepler's equation
KEPLER_TOL_RAD: float = 1e-4
KEPLER_MAX_ITER: int = 100
