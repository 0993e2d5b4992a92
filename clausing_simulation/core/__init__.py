"""
Clausing 模拟核心模块

该子包包含模拟的核心功能模块：
- constants: 数值常数和调试标志
- exceptions: 异常类型
- data_classes: 数据结构定义（SimulationParameters, ParticleState, ClausingResults 等）
- geometry: 几何归一化和交点计算
- sampling: 发射与漫反射抽样
- transport: 粒子轨迹追踪
- simulation: 模拟主逻辑与统计汇总
- statistics: 统计误差估计
"""

# 常数
from .constants import (
    COSTHETA_MAX,
    MAX_BOUNCES,
    R_TOP,
    DEBUG,
)

# 异常
from .exceptions import (
    ClausingError,
    InvalidGeometryError,
    NoParticlesEscapedError,
)

# 数据类
from .data_classes import (
    SimulationParameters,
    NormalizedGeometry,
    TrackState,
    ParticleState,
    ParticleOutcome,
    RunAccumulators,
    ClausingResults,
    TrialSummary,
)

# 几何处理
from .geometry import (
    normalize_geometry,
    time_to_radius,
    radius_at_plane,
)

# 抽样
from .sampling import (
    sample_cosine_angles,
    sample_launch_direction,
    sample_wall_direction,
    sample_annulus_direction,
    sample_launch_radius,
    launch_particle,
)

# 输运
from .transport import (
    reemit_lower_wall,
    cross_stage_boundary,
    reemit_upper_wall,
    region_of,
    classify,
    advance,
    trace_particle,
)

# 模拟
from .simulation import (
    simulate_particle,
    finalize_results,
    accumulate_run,
    run_clausing,
    run_trials,
)

# 统计
from .statistics import (
    binomial_standard_error,
    summarize_samples,
)

__all__ = [
    # 常数
    'COSTHETA_MAX',
    'MAX_BOUNCES',
    'R_TOP',
    'DEBUG',
    # 异常
    'ClausingError',
    'InvalidGeometryError',
    'NoParticlesEscapedError',
    # 数据类
    'SimulationParameters',
    'NormalizedGeometry',
    'TrackState',
    'ParticleState',
    'ParticleOutcome',
    'RunAccumulators',
    'ClausingResults',
    'TrialSummary',
    # 几何
    'normalize_geometry',
    'time_to_radius',
    'radius_at_plane',
    # 抽样
    'sample_cosine_angles',
    'sample_launch_direction',
    'sample_wall_direction',
    'sample_annulus_direction',
    'sample_launch_radius',
    'launch_particle',
    # 输运
    'reemit_lower_wall',
    'cross_stage_boundary',
    'reemit_upper_wall',
    'region_of',
    'classify',
    'advance',
    'trace_particle',
    # 模拟
    'simulate_particle',
    'finalize_results',
    'accumulate_run',
    'run_clausing',
    'run_trials',
    # 统计
    'binomial_standard_error',
    'summarize_samples',
]
