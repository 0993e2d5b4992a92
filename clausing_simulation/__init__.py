"""
Clausing Factor Simulation Package
==================================

This package provides a Monte-Carlo estimate of the Clausing factor and the
downstream density correction factor for a two-stage cylindrical aperture
(an ion thruster screen/accel grid pair) in free-molecular flow.

Modules:
--------
- config: Configurable default parameters
- core.constants: Numerical constants and debug flag
- core.exceptions: Error types
- core.data_classes: Data structures (SimulationParameters, ParticleState, ClausingResults)
- core.geometry: Geometry normalization and surface intersections
- core.sampling: Launch and diffuse re-emission sampling
- core.transport: Particle trajectory tracing
- core.simulation: High-level simulation driver
- core.statistics: Monte Carlo uncertainty estimates
- reporting: Console summaries
- runner: Demonstration driver and command-line entry point
"""

from . import config
from .core.constants import COSTHETA_MAX, MAX_BOUNCES, DEBUG
from .core.exceptions import ClausingError, InvalidGeometryError, NoParticlesEscapedError
from .core.data_classes import (
    SimulationParameters,
    NormalizedGeometry,
    TrackState,
    ParticleState,
    ParticleOutcome,
    RunAccumulators,
    ClausingResults,
    TrialSummary,
)
from .core.geometry import normalize_geometry, time_to_radius
from .core.sampling import launch_particle
from .core.transport import trace_particle
from .core.simulation import (
    simulate_particle,
    run_clausing,
    run_trials,
)
from .reporting import (
    print_parameters,
    print_results,
    print_trial_summary,
)
from .runner import run_full_simulation

__version__ = "1.0.0"
__all__ = [
    # Config module
    "config",
    # Constants
    "COSTHETA_MAX",
    "MAX_BOUNCES",
    "DEBUG",
    # Exceptions
    "ClausingError",
    "InvalidGeometryError",
    "NoParticlesEscapedError",
    # Data classes
    "SimulationParameters",
    "NormalizedGeometry",
    "TrackState",
    "ParticleState",
    "ParticleOutcome",
    "RunAccumulators",
    "ClausingResults",
    "TrialSummary",
    # Geometry
    "normalize_geometry",
    "time_to_radius",
    # Transport
    "launch_particle",
    "trace_particle",
    # Simulation
    "simulate_particle",
    "run_clausing",
    "run_trials",
    # Reporting
    "print_parameters",
    "print_results",
    "print_trial_summary",
    "run_full_simulation",
]
