"""
流水线模块 - 数据加载/脚本解析/渲染/写出的编排
"""

from .executor import CVExecutor, StageEnum

__all__ = [
    "CVExecutor",
    "StageEnum",
]
