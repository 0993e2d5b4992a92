"""
Console reporting of simulation inputs and results.
"""

from __future__ import annotations

from . import config
from .core.data_classes import ClausingResults, SimulationParameters, TrialSummary
from .core.geometry import normalize_geometry


def print_parameters(params: SimulationParameters):
    """Print the input grid dimensions and their normalized form."""
    geometry = normalize_geometry(params)

    print("\n" + "="*60)
    print("GRID APERTURE PARAMETERS")
    print("="*60)
    print(f"Screen grid thickness:   {params.thick_screen}")
    print(f"Accel grid thickness:    {params.thick_accel}")
    print(f"Screen aperture radius:  {params.r_screen}")
    print(f"Accel aperture radius:   {params.r_accel}")
    print(f"Grid spacing:            {params.grid_space}")
    print(f"Particles:               {params.npart:,}")
    print("-"*60)
    print(f"Normalized r_bottom:     {geometry.r_bottom:.4f}")
    print(f"Normalized len_bottom:   {geometry.len_bottom:.4f}")
    print(f"Normalized len_top:      {geometry.len_top:.4f}")
    print(f"Normalized length:       {geometry.length:.4f}")
    print("="*60)


def print_results(results: ClausingResults):
    """Print a formatted summary of one run.

    Parameters
    ----------
    results : ClausingResults
        Output of :func:`run_clausing`.
    """
    p = config.RESULT_PRECISION
    npart = results.npart

    print("\n" + "="*60)
    print("CLAUSING FACTOR RESULTS")
    print("="*60)
    print(f"Clausing factor:              {results.clausing_factor:.{p}f} "
          f"+/- {results.clausing_std_error:.{p}f}")
    print(f"Downstream correction factor: {results.den_cor:.{p}f}")
    print(f"Max iterations:               {results.max_count}")
    print(f"Particles lost (cutoff):      {results.nlost}")
    if npart:
        print(f"Particles escaped:            {results.n_escaped:,} "
              f"({100*results.n_escaped/npart:.2f}%)")
        print(f"Particles absorbed:           {results.n_absorbed:,} "
              f"({100*results.n_absorbed/npart:.2f}%)")
    print(f"Mean launch vz:               {results.vz_launch_avg:.{p}f}")
    print(f"Mean exit vz:                 {results.vz_exit_avg:.{p}f}")
    print("="*60)

    if npart and results.nlost > config.STUCK_WARN_FRACTION * npart:
        print(f"[warning] {results.nlost} particles hit the iteration cutoff; "
              f"consider raising max_bounces")
    if results.n_tangent_fallbacks:
        print(f"[info] Tangent fallback used {results.n_tangent_fallbacks} times")
    print()


def print_trial_summary(summary: TrialSummary):
    """Print the spread of the factors over repeated trials."""
    p = config.RESULT_PRECISION
    c_lo, c_hi = summary.clausing_ci95
    d_lo, d_hi = summary.den_cor_ci95

    print("\n" + "="*60)
    print(f"TRIAL STATISTICS ({summary.n_trials} trials)")
    print("="*60)
    for i, trial in enumerate(summary.trials, start=1):
        print(f"  #{i}: clausing={trial.clausing_factor:.{p}f}  den_cor={trial.den_cor:.{p}f}")
    print("-"*60)
    print("Clausing factor:")
    print(f"  Mean: {summary.clausing_mean:.{p}f}, Std: {summary.clausing_std:.{p}f}")
    print(f"  95% CI: [{c_lo:.{p}f}, {c_hi:.{p}f}]")
    print("Downstream correction factor:")
    print(f"  Mean: {summary.den_cor_mean:.{p}f}, Std: {summary.den_cor_std:.{p}f}")
    print(f"  95% CI: [{d_lo:.{p}f}, {d_hi:.{p}f}]")
    print("="*60)
