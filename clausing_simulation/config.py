"""
Configuration settings for the Clausing factor simulation.

This module contains the default parameters used by the runner and CLI.
Users can modify these values to customize the simulation without changing
the core code.
"""

from __future__ import annotations

from .core.constants import MAX_BOUNCES

# =============================================================================
# Example Grid Geometry
# =============================================================================

# Grid thicknesses (any consistent length unit, e.g. mm)
THICK_SCREEN = 1.0
THICK_ACCEL = 0.5

# Aperture radii
R_SCREEN = 2.0
R_ACCEL = 1.0

# Axial gap between screen and accel grids
GRID_SPACE = 0.3

# =============================================================================
# Simulation Parameters
# =============================================================================

# Number of particles launched per run
DEFAULT_N_PARTICLES = 10000

# Iteration cutoff per particle
DEFAULT_MAX_BOUNCES = MAX_BOUNCES

# Number of independent runs for trial statistics
DEFAULT_N_TRIALS = 1

# =============================================================================
# Output Settings
# =============================================================================

# Decimal places for printed factors
RESULT_PRECISION = 6

# Warn when more than this fraction of particles hits the iteration cutoff
STUCK_WARN_FRACTION = 0.001
