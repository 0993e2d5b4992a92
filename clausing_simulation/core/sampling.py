"""
Random sampling utilities for particle launch and diffuse re-emission.

Every sampler draws from an explicit ``numpy.random.Generator`` so runs can
be reproduced from a seed.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .constants import COSTHETA_MAX, TWO_PI
from .data_classes import NormalizedGeometry, ParticleState
from .geometry import time_to_radius


def sample_cosine_angles(rng: np.random.Generator) -> Tuple[float, float, float, float]:
    """Sample polar and azimuthal angles of a cosine-law (Lambertian) emission.

    ``cos(theta) = sqrt(1 - U)`` gives a flux weighted by the cosine from the
    surface normal. It is clamped to ``COSTHETA_MAX`` so the tangential
    component never vanishes.

    Returns
    -------
    tuple : (cos_theta, sin_theta, cos_phi, sin_phi)
    """
    cos_theta = min(math.sqrt(1.0 - rng.random()), COSTHETA_MAX)
    phi = TWO_PI * rng.random()
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
    return cos_theta, sin_theta, math.cos(phi), math.sin(phi)


def sample_launch_direction(rng: np.random.Generator) -> Tuple[float, float, float]:
    """Cosine-law direction about the +z axis (always moving up)."""
    cos_theta, sin_theta, cos_phi, sin_phi = sample_cosine_angles(rng)
    return cos_phi * sin_theta, sin_phi * sin_theta, cos_theta


def sample_wall_direction(rng: np.random.Generator) -> Tuple[float, float, float]:
    """Cosine-law direction about the inward normal of a cylinder wall.

    The normal is the ``vx`` axis, so ``vz`` may take either sign.
    """
    cos_theta, sin_theta, cos_phi, sin_phi = sample_cosine_angles(rng)
    return cos_theta, sin_phi * sin_theta, cos_phi * sin_theta


def sample_annulus_direction(rng: np.random.Generator) -> Tuple[float, float, float]:
    """Cosine-law direction about the downward normal of the accel annulus."""
    cos_theta, sin_theta, cos_phi, sin_phi = sample_cosine_angles(rng)
    return cos_phi * sin_theta, sin_phi * sin_theta, -cos_theta


def sample_launch_radius(r_bottom: float, rng: np.random.Generator) -> float:
    """Area-weighted radial position on a disk of radius ``r_bottom``."""
    return r_bottom * math.sqrt(rng.random())


def launch_particle(geometry: NormalizedGeometry, rng: np.random.Generator) -> ParticleState:
    """Launch one particle from the base plane ``z = 0``.

    Parameters
    ----------
    geometry : NormalizedGeometry
        Normalized aperture dimensions.
    rng : numpy.random.Generator
        Source of uniform deviates.

    Returns
    -------
    ParticleState
        The first flight segment, with ``z`` set to where it meets the lower
        cylinder wall.
    """
    r0 = sample_launch_radius(geometry.r_bottom, rng)
    vx, vy, vz = sample_launch_direction(rng)
    t, clamped = time_to_radius(r0, vx, vy, geometry.r_bottom)
    return ParticleState(
        r0=r0,
        z0=0.0,
        vx=vx,
        vy=vy,
        vz=vz,
        z=vz * t,
        count=0,
        tangent_fallbacks=int(clamped),
    )
