#!/usr/bin/env python
"""
Clausing Factor Simulation - Main Runner Script

This script runs the Clausing factor calculation for a screen/accel grid
pair and prints the inputs and results.

Usage:
    python run_simulation.py
    python run_simulation.py -n 100000 --seed 42
    python run_simulation.py --r-screen 0.95 --r-accel 0.6 --trials 5
"""

from pathlib import Path
import sys

# 添加项目根目录到路径（确保可以导入 clausing_simulation）
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from clausing_simulation.runner import run_full_simulation, main as runner_main


def main():
    """脚本入口点"""
    if len(sys.argv) > 1:
        # 如果有命令行参数，使用 argparse 处理
        sys.exit(runner_main())
    else:
        # 默认运行 - 使用 config 中的示例几何
        run_full_simulation()


if __name__ == "__main__":
    main()
