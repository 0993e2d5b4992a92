"""
Free-molecular particle transport through the two-stage aperture.

A particle is traced as a sequence of straight flight segments
(:class:`ParticleState`). Each tracer iteration applies up to three
transitions in a fixed order, each producing a new segment:

1. ``reemit_lower_wall``    segment ends on the screen cylinder wall
2. ``cross_stage_boundary`` segment emitted below ``len_bottom`` reaches it
3. ``reemit_upper_wall``    segment ends on the accel cylinder wall

A particle re-emitted by an earlier transition can fire a later one in the
same iteration. After the transitions, :func:`classify` decides whether the
particle has escaped, been absorbed, or hit the iteration cutoff.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

import numpy as np

from .constants import DEBUG, MAX_BOUNCES, R_TOP
from .data_classes import NormalizedGeometry, ParticleOutcome, ParticleState, TrackState
from .geometry import radius_at_plane, time_to_radius
from .sampling import sample_annulus_direction, sample_wall_direction


def reemit_lower_wall(
    state: ParticleState,
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
) -> ParticleState:
    """Diffusely re-emit a particle from the screen cylinder wall at ``state.z``."""
    vx, vy, vz = sample_wall_direction(rng)
    r0 = geometry.r_bottom
    t, clamped = time_to_radius(r0, vx, vy, r0)
    return replace(
        state,
        r0=r0,
        z0=state.z,
        vx=vx,
        vy=vy,
        vz=vz,
        z=state.z + vz * t,
        tangent_fallbacks=state.tangent_fallbacks + int(clamped),
    )


def cross_stage_boundary(
    state: ParticleState,
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
) -> ParticleState:
    """Handle a segment that rises through the plane ``z = len_bottom``.

    If it crosses inside the accel aperture (``r <= 1``) the segment is
    extended to the accel wall. Otherwise it strikes the upstream face of
    the accel grid and is re-emitted downward from that point.
    """
    len_bottom = geometry.len_bottom
    r = radius_at_plane(state.r0, state.z0, state.vx, state.vy, state.vz, len_bottom)

    if r <= R_TOP:
        t, clamped = time_to_radius(state.r0, state.vx, state.vy, R_TOP)
        return replace(
            state,
            z=state.z0 + state.vz * t,
            tangent_fallbacks=state.tangent_fallbacks + int(clamped),
        )

    vx, vy, vz = sample_annulus_direction(rng)
    t, clamped = time_to_radius(r, vx, vy, geometry.r_bottom)
    return replace(
        state,
        r0=r,
        z0=len_bottom,
        vx=vx,
        vy=vy,
        vz=vz,
        z=len_bottom + vz * t,
        tangent_fallbacks=state.tangent_fallbacks + int(clamped),
    )


def reemit_upper_wall(
    state: ParticleState,
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
) -> ParticleState:
    """Diffusely re-emit a particle from the accel cylinder wall at ``state.z``.

    A re-emitted segment that heads back below ``len_bottom`` is extended to
    the screen cylinder wall instead. For ``r_bottom < 1`` that segment can
    miss radius ``r_bottom`` entirely; the tangent fallback in
    :func:`time_to_radius` then applies.
    """
    vx, vy, vz = sample_wall_direction(rng)
    z0 = state.z
    t, clamped = time_to_radius(R_TOP, vx, vy, R_TOP)
    z = z0 + vz * t
    fallbacks = state.tangent_fallbacks + int(clamped)

    if z < geometry.len_bottom:
        t, clamped = time_to_radius(R_TOP, vx, vy, geometry.r_bottom)
        z = z0 + vz * t
        fallbacks += int(clamped)

    return replace(
        state,
        r0=R_TOP,
        z0=z0,
        vx=vx,
        vy=vy,
        vz=vz,
        z=z,
        tangent_fallbacks=fallbacks,
    )


def region_of(state: ParticleState, geometry: NormalizedGeometry) -> TrackState:
    """Non-terminal region of a segment, judged by where it ends."""
    if state.z < geometry.len_bottom:
        return TrackState.IN_LOWER_CYLINDER
    if state.z0 < geometry.len_bottom:
        return TrackState.CROSSING_BOUNDARY
    return TrackState.IN_UPPER_CYLINDER


def classify(
    state: ParticleState,
    geometry: NormalizedGeometry,
    max_bounces: int = MAX_BOUNCES,
) -> TrackState:
    """Classify a segment after a tracer iteration.

    Position takes precedence over the cutoff: a particle that leaves the
    aperture on the cutoff iteration is escaped or absorbed, not stuck.
    """
    if state.z < 0.0:
        return TrackState.ABSORBED
    if state.z > geometry.length:
        return TrackState.ESCAPED
    if state.count > max_bounces:
        return TrackState.STUCK
    return region_of(state, geometry)


def advance(
    state: ParticleState,
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
) -> ParticleState:
    """Run one tracer iteration on ``state``."""
    state = replace(state, count=state.count + 1)

    if state.z < geometry.len_bottom:
        state = reemit_lower_wall(state, geometry, rng)

    if state.z >= geometry.len_bottom and state.z0 < geometry.len_bottom:
        state = cross_stage_boundary(state, geometry, rng)

    if geometry.len_bottom <= state.z <= geometry.length:
        state = reemit_upper_wall(state, geometry, rng)

    return state


def trace_particle(
    state: ParticleState,
    geometry: NormalizedGeometry,
    rng: np.random.Generator,
    max_bounces: int = MAX_BOUNCES,
    trajectory: Optional[List[ParticleState]] = None,
) -> ParticleOutcome:
    """Trace a launched particle until it escapes, is absorbed or gets stuck.

    Parameters
    ----------
    state : ParticleState
        Launch segment from :func:`launch_particle`.
    geometry : NormalizedGeometry
        Normalized aperture dimensions.
    rng : numpy.random.Generator
        Source of uniform deviates for re-emission.
    max_bounces : int
        Iteration cutoff; the particle is stuck once its count exceeds it.
    trajectory : list, optional
        If given, the launch segment and every subsequent segment are
        appended to it.

    Returns
    -------
    ParticleOutcome
        Terminal fate, launch and final ``vz``, and iterations used.
    """
    vz_launch = state.vz
    if trajectory is not None:
        trajectory.append(state)

    while True:
        state = advance(state, geometry, rng)
        if trajectory is not None:
            trajectory.append(state)
        fate = classify(state, geometry, max_bounces)
        if fate.is_terminal:
            break

    if DEBUG and fate is TrackState.STUCK:
        print(f"[debug] Particle stuck after {state.count} iterations at z={state.z:.4f}")

    return ParticleOutcome(
        fate=fate,
        vz_launch=vz_launch,
        vz_final=state.vz,
        count=state.count,
        tangent_fallbacks=state.tangent_fallbacks,
    )
