"""
单画板处理阶段定义

顺序：
SELECT_ARTBOARD → APPLY_VISIBILITY(可选) → EXPORT_PRIMARY →
EXPORT_FALLBACK(直接导出失败时) → RESTORE_VISIBILITY → RECORD_OUTCOME

失败结果记录所处阶段，便于定位。
"""

from __future__ import annotations

from enum import Enum


class ArtboardStage(str, Enum):
    """单画板阶段枚举"""
    SELECT_ARTBOARD = "SELECT_ARTBOARD"
    APPLY_VISIBILITY = "APPLY_VISIBILITY"
    EXPORT_PRIMARY = "EXPORT_PRIMARY"
    EXPORT_FALLBACK = "EXPORT_FALLBACK"
    RESTORE_VISIBILITY = "RESTORE_VISIBILITY"
    RECORD_OUTCOME = "RECORD_OUTCOME"
