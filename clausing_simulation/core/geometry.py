"""
Geometry normalization and intersection helpers for the two-stage aperture.

Coordinates are normalized to the accel aperture radius. The lower (screen)
cylinder has radius ``r_bottom`` and spans ``0 <= z < len_bottom``; the upper
(accel) cylinder has radius 1 and spans ``len_bottom <= z <= length``.

A flight segment is described in the frame of its emission point: the
particle leaves radial offset ``r0`` so that its transverse position after a
path parameter ``t`` is ``(r0 - vx*t, vy*t)``.
"""

from __future__ import annotations

import math
from typing import Tuple

from .data_classes import NormalizedGeometry, SimulationParameters


def normalize_geometry(params: SimulationParameters) -> NormalizedGeometry:
    """Convert physical grid dimensions into lengths normalized to ``r_accel``.

    Parameters
    ----------
    params : SimulationParameters
        Physical dimensions. Validated before use.

    Returns
    -------
    NormalizedGeometry
        ``r_bottom``, ``len_bottom``, ``len_top`` and total ``length``.
    """
    params.validate()
    r_bottom = params.r_screen / params.r_accel
    len_bottom = (params.thick_screen + params.grid_space) / params.r_accel
    len_top = params.thick_accel / params.r_accel
    return NormalizedGeometry(
        r_bottom=r_bottom,
        len_bottom=len_bottom,
        len_top=len_top,
        length=len_bottom + len_top,
    )


def time_to_radius(r0: float, vx: float, vy: float, rf: float) -> Tuple[float, bool]:
    """Path parameter at which a segment reaches radius ``rf``.

    Solves ``(r0 - vx*t)**2 + (vy*t)**2 = rf**2`` for the forward root

        t = [vx*r0 + sqrt((vx**2 + vy**2)*rf**2 - (vy*r0)**2)] / (vx**2 + vy**2)

    When the discriminant is negative (a near-tangent segment that never
    reaches ``rf``) the square-root term is set to zero. This keeps the
    tracer running for extreme aspect ratios but can bias results there.

    Returns
    -------
    tuple : (t, tangent_fallback)
        ``tangent_fallback`` is True when the discriminant was clamped.
    """
    v_perp_sq = vx * vx + vy * vy
    discriminant = v_perp_sq * rf * rf - (vy * r0) ** 2
    if discriminant < 0.0:
        return (vx * r0) / v_perp_sq, True
    return (vx * r0 + math.sqrt(discriminant)) / v_perp_sq, False


def radius_at_plane(r0: float, z0: float, vx: float, vy: float, vz: float, z_plane: float) -> float:
    """Radial offset at which a segment crosses the plane ``z = z_plane``."""
    t = (z_plane - z0) / vz
    return math.hypot(r0 - vx * t, vy * t)
