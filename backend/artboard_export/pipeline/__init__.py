"""
流水线模块 - 逐画板导出编排

子模块：
- stages: 单画板阶段定义
- executor: 导出编排器
"""

from .executor import ExportOrchestrator, run_export
from .stages import ArtboardStage

__all__ = [
    "ArtboardStage",
    "ExportOrchestrator",
    "run_export",
]
