"""
粒子轨迹追踪的单元测试
"""

import math

import numpy as np
import pytest

from clausing_simulation.core.data_classes import NormalizedGeometry, ParticleState, TrackState
from clausing_simulation.core.geometry import time_to_radius
from clausing_simulation.core.sampling import launch_particle
from clausing_simulation.core.transport import (
    advance,
    classify,
    cross_stage_boundary,
    reemit_lower_wall,
    reemit_upper_wall,
    region_of,
    trace_particle,
)


class FixedRng:
    """按顺序返回预设均匀随机数，用尽时报错"""

    def __init__(self, values=()):
        self.values = list(values)

    def random(self):
        if not self.values:
            raise AssertionError("unexpected random draw")
        return self.values.pop(0)


GEOMETRY = NormalizedGeometry(r_bottom=2.0, len_bottom=1.3, len_top=0.5, length=1.8)
NARROW_SCREEN = NormalizedGeometry(r_bottom=0.5, len_bottom=1.3, len_top=0.5, length=1.8)
SIN60 = math.sqrt(0.75)


def make_state(**overrides):
    values = dict(r0=0.5, z0=0.0, vx=0.6, vy=0.0, vz=0.8, z=0.5, count=1)
    values.update(overrides)
    return ParticleState(**values)


class TestLowerWall:
    """测试下圆柱壁面漫反射"""

    def test_reemission(self):
        """测试重新发射位置与方向"""
        state = make_state(z=0.5)
        new = reemit_lower_wall(state, GEOMETRY, FixedRng([0.75, 0.0]))
        assert new.r0 == GEOMETRY.r_bottom
        assert new.z0 == pytest.approx(0.5)
        assert (new.vx, new.vy, new.vz) == pytest.approx((0.5, 0.0, SIN60))
        # Radial chord of length 4 at radial speed 0.5
        assert new.z == pytest.approx(0.5 + 8.0 * SIN60)
        assert new.count == state.count

    def test_original_state_unchanged(self):
        """测试原状态不被修改"""
        state = make_state(z=0.5)
        reemit_lower_wall(state, GEOMETRY, FixedRng([0.75, 0.0]))
        assert state.z == 0.5
        assert state.r0 == 0.5


class TestStageBoundary:
    """测试跨越两级分界面"""

    def test_passes_through_aperture(self):
        """测试在加速栅孔内穿过"""
        state = make_state(r0=0.5, z0=1.0, vx=0.6, vy=0.0, vz=0.8, z=5.0)
        new = cross_stage_boundary(state, GEOMETRY, FixedRng())
        assert new.z == pytest.approx(3.0)
        assert (new.r0, new.z0, new.vx, new.vy, new.vz) == (0.5, 1.0, 0.6, 0.0, 0.8)

    def test_strikes_annulus(self):
        """测试撞击加速栅上游环面后向下反射"""
        state = make_state(r0=1.8, z0=1.0, vx=0.0, vy=0.6, vz=0.8, z=1.5)
        new = cross_stage_boundary(state, GEOMETRY, FixedRng([0.75, 0.0]))
        r_hit = math.hypot(1.8, 0.6 * 0.375)
        assert new.r0 == pytest.approx(r_hit)
        assert new.z0 == GEOMETRY.len_bottom
        assert (new.vx, new.vy, new.vz) == pytest.approx((SIN60, 0.0, -0.5))
        t, _ = time_to_radius(r_hit, SIN60, 0.0, GEOMETRY.r_bottom)
        assert new.z == pytest.approx(GEOMETRY.len_bottom - 0.5 * t)
        assert new.z < GEOMETRY.len_bottom


class TestUpperWall:
    """测试上圆柱壁面漫反射"""

    def test_reemission_upward(self):
        """测试向上反射"""
        state = make_state(r0=1.0, z0=1.3, z=1.5)
        new = reemit_upper_wall(state, GEOMETRY, FixedRng([0.75, 0.0]))
        assert new.r0 == 1.0
        assert new.z0 == pytest.approx(1.5)
        assert new.z == pytest.approx(1.5 + 4.0 * SIN60)
        assert new.tangent_fallbacks == 0

    def test_reemission_back_into_lower_stage(self):
        """测试向下反射回下级时以下圆柱半径计算交点"""
        state = make_state(r0=1.0, z0=1.3, z=1.5)
        new = reemit_upper_wall(state, GEOMETRY, FixedRng([0.75, 0.5]))
        assert new.vz == pytest.approx(-SIN60)
        t, clamped = time_to_radius(1.0, new.vx, new.vy, GEOMETRY.r_bottom)
        assert not clamped
        assert t == pytest.approx(6.0)
        assert new.z == pytest.approx(1.5 + new.vz * t)

    def test_tangent_fallback(self):
        """测试判别式为负时的回退处理"""
        state = make_state(r0=1.0, z0=1.3, z=1.5)
        new = reemit_upper_wall(state, NARROW_SCREEN, FixedRng([0.75, 0.625]))
        v_perp_sq = new.vx ** 2 + new.vy ** 2
        assert new.vz < 0.0
        assert v_perp_sq * 0.25 - new.vy ** 2 < 0.0
        assert new.tangent_fallbacks == 1
        assert new.z == pytest.approx(1.5 + new.vz * new.vx / v_perp_sq)


class TestClassify:
    """测试终止状态判定"""

    def test_absorbed(self):
        assert classify(make_state(z=-0.1), GEOMETRY) is TrackState.ABSORBED

    def test_escaped(self):
        assert classify(make_state(z=2.0), GEOMETRY) is TrackState.ESCAPED

    def test_stuck(self):
        state = make_state(z=0.5, count=11)
        assert classify(state, GEOMETRY, max_bounces=10) is TrackState.STUCK

    def test_position_wins_over_cutoff(self):
        """测试在截断迭代时离开的粒子按位置判定"""
        assert classify(make_state(z=2.0, count=11), GEOMETRY, max_bounces=10) is TrackState.ESCAPED
        assert classify(make_state(z=-1.0, count=11), GEOMETRY, max_bounces=10) is TrackState.ABSORBED

    def test_cutoff_not_reached(self):
        state = make_state(z=0.5, count=10)
        assert classify(state, GEOMETRY, max_bounces=10) is TrackState.IN_LOWER_CYLINDER

    @pytest.mark.parametrize("z0, z, expected", [
        (0.0, 0.5, TrackState.IN_LOWER_CYLINDER),
        (0.0, 1.5, TrackState.CROSSING_BOUNDARY),
        (1.4, 1.6, TrackState.IN_UPPER_CYLINDER),
    ])
    def test_regions(self, z0, z, expected):
        """测试非终止区域"""
        assert region_of(make_state(z0=z0, z=z), GEOMETRY) is expected
        assert not expected.is_terminal


class TestTrace:
    """测试完整轨迹追踪"""

    def test_advance_increments_count(self):
        """测试每次迭代计数加一"""
        rng = np.random.default_rng(1)
        state = launch_particle(GEOMETRY, rng)
        assert advance(state, GEOMETRY, rng).count == 1

    def test_direct_escape_single_iteration(self):
        """测试零长度孔直接逃逸"""
        geometry = NormalizedGeometry(r_bottom=1.0, len_bottom=0.0, len_top=0.0, length=0.0)
        rng = np.random.default_rng(2)
        state = launch_particle(geometry, rng)
        outcome = trace_particle(state, geometry, rng)
        assert outcome.fate is TrackState.ESCAPED
        assert outcome.count == 1
        assert outcome.vz_final == outcome.vz_launch

    def test_terminates_with_trajectory(self):
        """测试轨迹记录与终止"""
        rng = np.random.default_rng(3)
        for _ in range(50):
            trajectory = []
            state = launch_particle(GEOMETRY, rng)
            outcome = trace_particle(state, GEOMETRY, rng, trajectory=trajectory)
            assert outcome.fate.is_terminal
            assert outcome.count >= 1
            assert len(trajectory) == outcome.count + 1
            assert trajectory[0] is state
            assert outcome.vz_launch == state.vz

    def test_cutoff_marks_stuck(self):
        """测试长管在低截断下粒子被判为卡住"""
        geometry = NormalizedGeometry(r_bottom=1.0, len_bottom=50.0, len_top=50.0, length=100.0)
        rng = np.random.default_rng(4)
        fates = [
            trace_particle(launch_particle(geometry, rng), geometry, rng, max_bounces=2).fate
            for _ in range(200)
        ]
        assert TrackState.STUCK in fates
