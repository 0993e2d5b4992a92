"""
Numerical constants and simulation configuration.
"""

import math

# Upper clamp on sampled cos(theta); avoids grazing trajectories whose
# radial speed makes the intersection divisions ill-conditioned.
COSTHETA_MAX = 0.99999

# Hard cutoff on tracer iterations per particle
MAX_BOUNCES = 1000

# Normalized radius of the upper (accel) aperture
R_TOP = 1.0

TWO_PI = 2.0 * math.pi

# Debug flag
DEBUG = False
