"""
Data classes for the Clausing factor simulation.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from .constants import R_TOP
from .exceptions import InvalidGeometryError
from .statistics import binomial_standard_error


@dataclass
class SimulationParameters:
    """Physical description of a screen/accel grid aperture pair.

    Attributes
    ----------
    thick_screen : float
        Thickness of the screen (lower) grid.
    thick_accel : float
        Thickness of the accel (upper) grid.
    r_screen : float
        Screen aperture radius.
    r_accel : float
        Accel aperture radius. Used as the normalization length.
    grid_space : float
        Axial gap between the two grids.
    npart : int
        Number of particles to launch.

    All lengths share one (arbitrary) unit; the results are dimensionless.
    """

    thick_screen: float
    thick_accel: float
    r_screen: float
    r_accel: float
    grid_space: float
    npart: int

    def validate(self) -> None:
        """Raise InvalidGeometryError if any precondition is violated."""
        lengths = {
            "thick_screen": self.thick_screen,
            "thick_accel": self.thick_accel,
            "r_screen": self.r_screen,
            "r_accel": self.r_accel,
            "grid_space": self.grid_space,
        }
        for name, value in lengths.items():
            if not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidGeometryError(f"{name} must be a finite number, got {value!r}")
            if value < 0.0:
                raise InvalidGeometryError(f"{name} must be non-negative, got {value}")
        if self.r_accel <= 0.0:
            raise InvalidGeometryError(f"r_accel must be positive, got {self.r_accel}")
        if isinstance(self.npart, bool) or not isinstance(self.npart, numbers.Integral):
            raise InvalidGeometryError(f"npart must be an integer, got {self.npart!r}")
        if self.npart < 1:
            raise InvalidGeometryError(f"npart must be at least 1, got {self.npart}")


@dataclass(frozen=True)
class NormalizedGeometry:
    """Dimensions normalized to the accel aperture radius (r_top = 1)."""

    r_bottom: float
    len_bottom: float
    len_top: float
    length: float

    @property
    def r_top(self) -> float:
        return R_TOP


class TrackState(Enum):
    """Where a particle is in its trajectory."""

    IN_LOWER_CYLINDER = "in_lower_cylinder"
    CROSSING_BOUNDARY = "crossing_boundary"
    IN_UPPER_CYLINDER = "in_upper_cylinder"
    ESCAPED = "escaped"
    ABSORBED = "absorbed"
    STUCK = "stuck"

    @property
    def is_terminal(self) -> bool:
        return self in (TrackState.ESCAPED, TrackState.ABSORBED, TrackState.STUCK)


@dataclass(frozen=True)
class ParticleState:
    """Straight-line flight segment of one particle.

    The particle was last emitted from radial offset ``r0`` at axial
    position ``z0``. Its direction cosines are ``(vx, vy, vz)``, where a
    positive ``vx`` points from the emission point towards the axis.
    ``z`` is the axial coordinate at which the segment meets the next
    bounding surface.
    """

    r0: float
    z0: float
    vx: float
    vy: float
    vz: float
    z: float
    count: int = 0
    tangent_fallbacks: int = 0


@dataclass(frozen=True)
class ParticleOutcome:
    """Terminal result of tracing a single particle."""

    fate: TrackState
    vz_launch: float
    vz_final: float
    count: int
    tangent_fallbacks: int = 0


@dataclass
class RunAccumulators:
    """Running sums for one simulation run.

    Partial accumulators (e.g. from independent trials) can be combined
    with :meth:`merge`.
    """

    n_launched: int = 0
    n_escaped: int = 0
    n_absorbed: int = 0
    nlost: int = 0
    vz_launch_total: float = 0.0
    vz_exit_total: float = 0.0
    max_count: int = 0
    n_tangent_fallbacks: int = 0

    def add(self, outcome: ParticleOutcome) -> None:
        self.n_launched += 1
        self.vz_launch_total += outcome.vz_launch
        if outcome.fate is TrackState.ESCAPED:
            self.n_escaped += 1
            self.vz_exit_total += outcome.vz_final
        elif outcome.fate is TrackState.ABSORBED:
            self.n_absorbed += 1
        elif outcome.fate is TrackState.STUCK:
            self.nlost += 1
        else:
            raise ValueError(f"Outcome has non-terminal fate {outcome.fate}")
        self.max_count = max(self.max_count, outcome.count)
        self.n_tangent_fallbacks += outcome.tangent_fallbacks

    def merge(self, other: "RunAccumulators") -> "RunAccumulators":
        """Return a new accumulator holding the combined sums."""
        return RunAccumulators(
            n_launched=self.n_launched + other.n_launched,
            n_escaped=self.n_escaped + other.n_escaped,
            n_absorbed=self.n_absorbed + other.n_absorbed,
            nlost=self.nlost + other.nlost,
            vz_launch_total=self.vz_launch_total + other.vz_launch_total,
            vz_exit_total=self.vz_exit_total + other.vz_exit_total,
            max_count=max(self.max_count, other.max_count),
            n_tangent_fallbacks=self.n_tangent_fallbacks + other.n_tangent_fallbacks,
        )


@dataclass(frozen=True)
class ClausingResults:
    """Final output of a Clausing factor run.

    Attributes
    ----------
    clausing_factor : float
        ``r_bottom**2 * n_escaped / npart``.
    max_count : int
        Largest number of tracer iterations used by any particle.
    nlost : int
        Particles terminated by the bounce cutoff.
    den_cor : float
        Downstream density correction factor, mean launch ``vz`` over mean
        exit ``vz``.
    """

    clausing_factor: float
    max_count: int
    nlost: int
    den_cor: float
    npart: int = 0
    n_escaped: int = 0
    n_absorbed: int = 0
    r_bottom: float = 1.0
    vz_launch_avg: float = 0.0
    vz_exit_avg: float = 0.0
    n_tangent_fallbacks: int = 0

    @property
    def transmission_probability(self) -> float:
        """Fraction of launched particles that escaped."""
        return self.n_escaped / self.npart if self.npart else 0.0

    @property
    def clausing_std_error(self) -> float:
        """Binomial standard error of the Clausing factor."""
        return binomial_standard_error(self.n_escaped, self.npart, scale=self.r_bottom ** 2)


@dataclass(frozen=True)
class TrialSummary:
    """Statistics over repeated independent runs of one geometry."""

    trials: List[ClausingResults]
    clausing_mean: float
    clausing_std: float
    clausing_std_error: float
    clausing_ci95: Tuple[float, float]
    den_cor_mean: float
    den_cor_std: float
    den_cor_std_error: float
    den_cor_ci95: Tuple[float, float]
    pooled: ClausingResults = field(repr=False)

    @property
    def n_trials(self) -> int:
        return len(self.trials)
