"""
发射与漫反射抽样的单元测试
"""

import math

import numpy as np
import pytest

from clausing_simulation.core.constants import COSTHETA_MAX
from clausing_simulation.core.data_classes import NormalizedGeometry
from clausing_simulation.core.sampling import (
    launch_particle,
    sample_annulus_direction,
    sample_cosine_angles,
    sample_launch_direction,
    sample_launch_radius,
    sample_wall_direction,
)


class FixedRng:
    """按顺序返回预设均匀随机数"""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


GEOMETRY = NormalizedGeometry(r_bottom=2.0, len_bottom=1.3, len_top=0.5, length=1.8)


class TestCosineAngles:
    """测试余弦律角度抽样"""

    def test_clamped_near_normal(self):
        """测试 cos(theta) 上限截断"""
        cos_theta, sin_theta, _, _ = sample_cosine_angles(FixedRng([0.0, 0.0]))
        assert cos_theta == COSTHETA_MAX
        assert sin_theta > 0.0

    def test_fixed_values(self):
        """测试指定随机数的结果"""
        cos_theta, sin_theta, cos_phi, sin_phi = sample_cosine_angles(FixedRng([0.75, 0.0]))
        assert cos_theta == pytest.approx(0.5)
        assert sin_theta == pytest.approx(math.sqrt(0.75))
        assert cos_phi == pytest.approx(1.0)
        assert sin_phi == pytest.approx(0.0)

    def test_lambertian_mean(self):
        """测试余弦律分布的 cos(theta) 均值为 2/3"""
        rng = np.random.default_rng(7)
        samples = [sample_cosine_angles(rng)[0] for _ in range(20000)]
        assert np.mean(samples) == pytest.approx(2.0 / 3.0, abs=0.01)
        assert max(samples) <= COSTHETA_MAX


class TestDirections:
    """测试方向抽样"""

    @pytest.mark.parametrize("sampler", [
        sample_launch_direction,
        sample_wall_direction,
        sample_annulus_direction,
    ])
    def test_unit_vectors(self, sampler):
        """测试方向为单位向量"""
        rng = np.random.default_rng(3)
        for _ in range(200):
            vx, vy, vz = sampler(rng)
            assert vx * vx + vy * vy + vz * vz == pytest.approx(1.0)

    def test_launch_always_upward(self):
        """测试底面发射方向向上"""
        rng = np.random.default_rng(11)
        assert all(sample_launch_direction(rng)[2] > 0.0 for _ in range(1000))

    def test_annulus_always_downward(self):
        """测试环面反射方向向下"""
        rng = np.random.default_rng(12)
        assert all(sample_annulus_direction(rng)[2] < 0.0 for _ in range(1000))

    def test_wall_emission_inward_both_vz_signs(self):
        """测试壁面反射指向轴线且 vz 可正可负"""
        rng = np.random.default_rng(13)
        directions = np.array([sample_wall_direction(rng) for _ in range(2000)])
        assert np.all(directions[:, 0] > 0.0)
        assert np.any(directions[:, 2] > 0.0)
        assert np.any(directions[:, 2] < 0.0)
        assert np.mean(directions[:, 2]) == pytest.approx(0.0, abs=0.05)

    def test_wall_direction_mapping(self):
        """测试壁面法向对应 vx 分量"""
        vx, vy, vz = sample_wall_direction(FixedRng([0.75, 0.0]))
        assert vx == pytest.approx(0.5)
        assert vy == pytest.approx(0.0)
        assert vz == pytest.approx(math.sqrt(0.75))


class TestLaunch:
    """测试粒子发射"""

    def test_area_weighted_radius(self):
        """测试按面积加权的半径抽样"""
        rng = np.random.default_rng(5)
        radii = np.array([sample_launch_radius(2.0, rng) for _ in range(20000)])
        assert np.all(radii < 2.0)
        # Uniform areal density: <r^2> = R^2 / 2
        assert np.mean(radii ** 2) == pytest.approx(2.0, abs=0.05)

    def test_launch_state(self):
        """测试发射状态"""
        rng = np.random.default_rng(21)
        for _ in range(500):
            state = launch_particle(GEOMETRY, rng)
            assert state.z0 == 0.0
            assert 0.0 <= state.r0 < GEOMETRY.r_bottom
            assert state.vz > 0.0
            assert state.z >= 0.0
            assert state.count == 0

    def test_launch_first_intersection(self):
        """测试首次交点落在下圆柱壁上"""
        # r0 = 2*sqrt(0.25) = 1, cos(theta) = 0.5, phi = 0
        state = launch_particle(GEOMETRY, FixedRng([0.25, 0.75, 0.0]))
        assert state.r0 == pytest.approx(1.0)
        assert state.vx == pytest.approx(math.sqrt(0.75))
        assert state.vz == pytest.approx(0.5)
        t = (state.z - state.z0) / state.vz
        assert math.hypot(state.r0 - state.vx * t, state.vy * t) == pytest.approx(GEOMETRY.r_bottom)
