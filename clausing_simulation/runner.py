"""
Clausing Factor Simulation Runner Module

This module provides the demonstration driver that can be called from
scripts or imported directly, and the ``clausing-sim`` command-line entry
point.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Union

from . import config
from .core.data_classes import ClausingResults, SimulationParameters, TrialSummary
from .core.exceptions import ClausingError, InvalidGeometryError
from .core.simulation import run_clausing, run_trials
from .reporting import print_parameters, print_results, print_trial_summary


def build_default_parameters(npart: Optional[int] = None) -> SimulationParameters:
    """Example grid geometry from :mod:`config`."""
    return SimulationParameters(
        thick_screen=config.THICK_SCREEN,
        thick_accel=config.THICK_ACCEL,
        r_screen=config.R_SCREEN,
        r_accel=config.R_ACCEL,
        grid_space=config.GRID_SPACE,
        npart=config.DEFAULT_N_PARTICLES if npart is None else npart,
    )


def run_full_simulation(
    params: Optional[SimulationParameters] = None,
    seed: Optional[int] = None,
    max_bounces: int = config.DEFAULT_MAX_BOUNCES,
    n_trials: int = config.DEFAULT_N_TRIALS,
    progress: bool = False,
    verbose: bool = False,
) -> Union[ClausingResults, TrialSummary]:
    """Run the Clausing calculation and print inputs and results.

    Parameters
    ----------
    params : SimulationParameters, optional
        Grid dimensions. If None, uses the config example geometry.
    seed : int, optional
        Random seed for a reproducible run.
    max_bounces : int
        Per-particle iteration cutoff.
    n_trials : int
        With more than one trial, independent runs are repeated and their
        spread is reported.
    progress : bool
        Show a progress bar over particles.
    verbose : bool
        Print particle fate statistics.

    Returns
    -------
    ClausingResults or TrialSummary
        A single run's results, or the trial summary when ``n_trials > 1``.
    """
    if params is None:
        params = build_default_parameters()
    if n_trials < 1:
        raise InvalidGeometryError(f"n_trials must be at least 1, got {n_trials}")

    print("[info] Running Clausing factor calculation...")
    print_parameters(params)

    if n_trials > 1:
        summary = run_trials(
            params,
            n_trials,
            seed=seed,
            max_bounces=max_bounces,
            progress=progress,
            verbose=verbose,
        )
        print_trial_summary(summary)
        print("\n[info] Pooled result over all trials:")
        print_results(summary.pooled)
        return summary

    results = run_clausing(
        params,
        seed=seed,
        max_bounces=max_bounces,
        progress=progress,
        verbose=verbose,
    )
    print_results(results)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Monte Carlo Clausing factor for a screen/accel grid aperture pair"
    )
    parser.add_argument("--thick-screen", type=float, default=config.THICK_SCREEN,
                        help="Screen grid thickness")
    parser.add_argument("--thick-accel", type=float, default=config.THICK_ACCEL,
                        help="Accel grid thickness")
    parser.add_argument("--r-screen", type=float, default=config.R_SCREEN,
                        help="Screen aperture radius")
    parser.add_argument("--r-accel", type=float, default=config.R_ACCEL,
                        help="Accel aperture radius")
    parser.add_argument("--grid-space", type=float, default=config.GRID_SPACE,
                        help="Gap between screen and accel grids")
    parser.add_argument("-n", "--npart", type=int, default=config.DEFAULT_N_PARTICLES,
                        help="Number of particles to launch")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible run")
    parser.add_argument("--max-bounces", type=int, default=config.DEFAULT_MAX_BOUNCES,
                        help="Iteration cutoff per particle")
    parser.add_argument("--trials", type=int, default=config.DEFAULT_N_TRIALS,
                        help="Number of independent runs")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print particle fate statistics")

    args = parser.parse_args(argv)

    params = SimulationParameters(
        thick_screen=args.thick_screen,
        thick_accel=args.thick_accel,
        r_screen=args.r_screen,
        r_accel=args.r_accel,
        grid_space=args.grid_space,
        npart=args.npart,
    )

    try:
        run_full_simulation(
            params,
            seed=args.seed,
            max_bounces=args.max_bounces,
            n_trials=args.trials,
            progress=args.progress,
            verbose=args.verbose,
        )
    except ClausingError as e:
        print(f"[error] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
