"""
Statistical utilities for Monte Carlo post-processing.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from scipy import stats


def binomial_standard_error(n_success: int, n_total: int, scale: float = 1.0) -> float:
    """Standard error of ``scale * n_success / n_total`` for Bernoulli trials.

    Parameters
    ----------
    n_success : int
        Number of successful trials (e.g. escaped particles).
    n_total : int
        Total number of trials.
    scale : float, optional
        Multiplier applied to the estimated fraction. The Clausing factor
        uses ``r_bottom**2``.

    Returns
    -------
    float
        The standard error, or 0.0 when ``n_total`` is zero.
    """
    if n_total <= 0:
        return 0.0
    p = n_success / n_total
    return scale * math.sqrt(p * (1.0 - p) / n_total)


def summarize_samples(
    values: Sequence[float],
    confidence: float = 0.95,
) -> Tuple[float, float, float, Tuple[float, float]]:
    """Compute mean, sample std, std error of mean and a confidence interval.

    The interval uses the Student-t quantile with ``n - 1`` degrees of
    freedom. With a single sample the spread is reported as zero.

    Returns
    -------
    tuple : (mean, std, std_error, (ci_low, ci_high))
    """
    data = np.asarray(values, dtype=float)
    n = data.size
    if n == 0:
        raise ValueError("Cannot summarize an empty sample")

    mean = float(np.mean(data))
    if n == 1:
        return mean, 0.0, 0.0, (mean, mean)

    std = float(np.std(data, ddof=1))
    std_error = std / math.sqrt(n)
    t_quantile = stats.t.ppf(0.5 + confidence / 2.0, df=n - 1)
    half_width = float(t_quantile) * std_error
    return mean, std, std_error, (mean - half_width, mean + half_width)
