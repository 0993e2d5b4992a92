"""
High-level simulation driver functions.
"""

from __future__ import annotations

import numbers
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from .constants import DEBUG, MAX_BOUNCES
from .data_classes import (
    ClausingResults,
    NormalizedGeometry,
    ParticleOutcome,
    RunAccumulators,
    SimulationParameters,
    TrialSummary,
)
from .exceptions import InvalidGeometryError, NoParticlesEscapedError
from .geometry import normalize_geometry
from .sampling import launch_particle
from .statistics import summarize_samples
from .transport import trace_particle

# Warn when the tangent fallback fires for more than this fraction of particles
TANGENT_FALLBACK_WARN_FRACTION = 0.01


def simulate_particle(
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
    max_bounces: int = MAX_BOUNCES,
) -> ParticleOutcome:
    """Launch a single particle from the base plane and trace it to termination."""
    state = launch_particle(geometry, rng)
    return trace_particle(state, geometry, rng, max_bounces=max_bounces)


def finalize_results(acc: RunAccumulators, geometry: NormalizedGeometry) -> ClausingResults:
    """Reduce running sums to the Clausing factor and density correction.

    Raises
    ------
    InvalidGeometryError
        If no particles were launched.
    NoParticlesEscapedError
        If no particle escaped, since ``den_cor`` is then undefined.
    """
    npart = acc.n_launched
    if npart < 1:
        raise InvalidGeometryError("Cannot finalize a run with no launched particles")
    if acc.n_escaped == 0:
        raise NoParticlesEscapedError(npart)

    r_bottom = geometry.r_bottom
    vz_launch_avg = acc.vz_launch_total / npart
    vz_exit_avg = acc.vz_exit_total / acc.n_escaped

    return ClausingResults(
        clausing_factor=r_bottom * r_bottom * acc.n_escaped / npart,
        max_count=acc.max_count,
        nlost=acc.nlost,
        den_cor=vz_launch_avg / vz_exit_avg,
        npart=npart,
        n_escaped=acc.n_escaped,
        n_absorbed=acc.n_absorbed,
        r_bottom=r_bottom,
        vz_launch_avg=vz_launch_avg,
        vz_exit_avg=vz_exit_avg,
        n_tangent_fallbacks=acc.n_tangent_fallbacks,
    )


def accumulate_run(
    geometry: NormalizedGeometry,
    npart: int,
    rng: np.random.Generator,
    max_bounces: int = MAX_BOUNCES,
    progress: bool = False,
) -> RunAccumulators:
    """Trace ``npart`` particles and return the unreduced sums."""
    if isinstance(max_bounces, bool) or not isinstance(max_bounces, numbers.Integral):
        raise InvalidGeometryError(f"max_bounces must be an integer, got {max_bounces!r}")
    if max_bounces < 1:
        raise InvalidGeometryError(f"max_bounces must be at least 1, got {max_bounces}")
    acc = RunAccumulators()
    for _ in tqdm(range(npart), desc="Tracing particles", disable=not progress):
        acc.add(simulate_particle(geometry, rng, max_bounces=max_bounces))
    return acc


def _report_run(acc: RunAccumulators) -> None:
    npart = acc.n_launched
    print("[debug] Particle fate statistics:")
    print(f"  - Escaped: {acc.n_escaped} ({acc.n_escaped/npart*100:.2f}%)")
    print(f"  - Absorbed at base: {acc.n_absorbed} ({acc.n_absorbed/npart*100:.2f}%)")
    print(f"  - Stuck at cutoff: {acc.nlost} ({acc.nlost/npart*100:.2f}%)")
    print(f"  - Max iterations: {acc.max_count}")
    if acc.n_tangent_fallbacks > TANGENT_FALLBACK_WARN_FRACTION * npart:
        print(f"[warning] Tangent fallback used {acc.n_tangent_fallbacks} times; "
              f"results may be biased for this aspect ratio")


def run_clausing(
    params: SimulationParameters,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    max_bounces: int = MAX_BOUNCES,
    progress: bool = False,
    verbose: bool = False,
) -> ClausingResults:
    """Estimate the Clausing factor and downstream correction for a grid pair.

    Parameters
    ----------
    params : SimulationParameters
        Grid dimensions and particle count.
    rng : numpy.random.Generator, optional
        Generator to draw from. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh generator when ``rng`` is not given. With neither,
        the run is unseeded.
    max_bounces : int
        Per-particle iteration cutoff.
    progress : bool
        Show a progress bar over particles.
    verbose : bool
        Print fate statistics after the run.

    Returns
    -------
    ClausingResults
    """
    geometry = normalize_geometry(params)
    if rng is None:
        rng = np.random.default_rng(seed)

    acc = accumulate_run(geometry, params.npart, rng, max_bounces=max_bounces, progress=progress)
    if verbose or DEBUG:
        _report_run(acc)
    return finalize_results(acc, geometry)


def run_trials(
    params: SimulationParameters,
    n_trials: int,
    seed: Optional[int] = None,
    max_bounces: int = MAX_BOUNCES,
    progress: bool = False,
    verbose: bool = False,
) -> TrialSummary:
    """Repeat :func:`run_clausing` with independent generators.

    Child generators are spawned from one ``SeedSequence`` so the set of
    trials is reproducible from ``seed``. Accumulators of all trials are
    merged into a pooled result.

    Returns
    -------
    TrialSummary
        Per-trial results, their spread, and the pooled result.
    """
    if n_trials < 1:
        raise InvalidGeometryError(f"n_trials must be at least 1, got {n_trials}")

    geometry = normalize_geometry(params)
    children = np.random.SeedSequence(seed).spawn(n_trials)

    trials: List[ClausingResults] = []
    pooled = RunAccumulators()
    for i, child in enumerate(children):
        acc = accumulate_run(
            geometry, params.npart, np.random.default_rng(child),
            max_bounces=max_bounces, progress=progress,
        )
        if verbose or DEBUG:
            print(f"[info] Trial {i + 1}/{n_trials}")
            _report_run(acc)
        trials.append(finalize_results(acc, geometry))
        pooled = pooled.merge(acc)

    c_mean, c_std, c_se, c_ci = summarize_samples([r.clausing_factor for r in trials])
    d_mean, d_std, d_se, d_ci = summarize_samples([r.den_cor for r in trials])

    return TrialSummary(
        trials=trials,
        clausing_mean=c_mean,
        clausing_std=c_std,
        clausing_std_error=c_se,
        clausing_ci95=c_ci,
        den_cor_mean=d_mean,
        den_cor_std=d_std,
        den_cor_std_error=d_se,
        den_cor_ci95=d_ci,
        pooled=finalize_results(pooled, geometry),
    )
