"""
Clausing 模拟包基本使用示例

这个示例展示了如何使用 clausing_simulation 包的基本功能。
"""

import numpy as np

# 导入主要模块
from clausing_simulation import (
    # 数据类
    SimulationParameters,
    TrackState,

    # 功能函数
    normalize_geometry,
    launch_particle,
    trace_particle,
    run_clausing,
    run_trials,
    print_results,
    print_trial_summary,
)

# 导入子包
from clausing_simulation.testing import (
    straight_tube_clausing,
    run_quick_test,
)


def example_single_particle():
    """单个粒子轨迹示例"""
    print("=" * 60)
    print("单个粒子轨迹示例")
    print("=" * 60)

    params = SimulationParameters(
        thick_screen=1.0, thick_accel=0.5, r_screen=2.0, r_accel=1.0, grid_space=0.3, npart=1,
    )
    geometry = normalize_geometry(params)
    rng = np.random.default_rng(2024)

    trajectory = []
    state = launch_particle(geometry, rng)
    outcome = trace_particle(state, geometry, rng, trajectory=trajectory)

    print(f"\n发射: r0={state.r0:.4f}, vz={state.vz:.4f}")
    for i, segment in enumerate(trajectory[1:], start=1):
        print(f"  迭代 {i}: r0={segment.r0:.4f}, z0={segment.z0:.4f}, z={segment.z:.4f}")
    print(f"结果: {outcome.fate.value} (迭代 {outcome.count} 次)")
    if outcome.fate is TrackState.ESCAPED:
        print(f"出口 vz = {outcome.vz_final:.4f}")


def example_grid_pair():
    """栅极孔对示例"""
    print("\n" + "=" * 60)
    print("栅极孔对 Clausing 因子示例")
    print("=" * 60)

    params = SimulationParameters(
        thick_screen=0.3, thick_accel=1.5, r_screen=0.95, r_accel=0.6, grid_space=0.6, npart=5000,
    )
    results = run_clausing(params, seed=1)
    print_results(results)

    summary = run_trials(params, n_trials=4, seed=1)
    print_trial_summary(summary)


def example_validation():
    """直管验证示例"""
    print("\n" + "=" * 60)
    print("直管参考值")
    print("=" * 60)

    for ratio in (0.5, 1.0, 2.0, 4.0):
        print(f"  L/R = {ratio}: W = {straight_tube_clausing(ratio):.4f}")

    run_quick_test()


def main():
    """主函数"""
    print("\n" + "=" * 60)
    print("Clausing 模拟包基本使用示例")
    print("=" * 60)

    # 运行各个示例
    example_single_particle()
    example_grid_pair()
    example_validation()

    print("\n" + "=" * 60)
    print("示例完成！")
    print("=" * 60)


if __name__ == "__main__":
    main()
