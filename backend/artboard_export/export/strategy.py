"""
导出策略 - 直接导出 + 兜底导出

职责：
1. PrimaryExport: 在当前文档上按画板范围直接导出
2. IsolatedCopyExport: 复制文档 → 只保留目标画板 → 导出 → 丢弃副本
3. TwoPhaseExporter: 直接导出失败时才走兜底；兜底也失败抛 FallbackExportError

清理约定：兜底导出的临时文档无论导出成功与否都不保存关闭。

测试要点：
- test_primary_success_skips_fallback: 直接导出成功不走兜底
- test_fallback_on_primary_failure: 直接导出失败走兜底
- test_scratch_closed_on_failure: 兜底失败时副本同样关闭
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..interfaces import (
    ExportError,
    FallbackExportError,
    IDocument,
    IExportStrategy,
    PrimaryExportError,
)
from ..models import PDFExportOptions
from .naming import artboard_range

logger = logging.getLogger(__name__)


class PrimaryExport(IExportStrategy):
    """直接导出：在当前文档上限定画板范围"""

    name = "primary"

    def export(
        self,
        document: IDocument,
        artboard_index: int,
        path: Path,
        options: PDFExportOptions,
    ) -> Path:
        try:
            return document.export_artboard_range(path, artboard_range(artboard_index), options)
        except Exception as e:
            raise PrimaryExportError(f"直接导出失败: {e}") from e


class IsolatedCopyExport(IExportStrategy):
    """兜底导出：在文档副本中只保留目标画板后导出"""

    name = "fallback"

    def export(
        self,
        document: IDocument,
        artboard_index: int,
        path: Path,
        options: PDFExportOptions,
    ) -> Path:
        scratch = document.duplicate()
        try:
            scratch.set_active_artboard(artboard_index)
            count = len(scratch.list_artboards())
            for k in range(count - 1, -1, -1):
                if k != artboard_index:
                    scratch.remove_artboard(k)
            # 副本中只剩目标画板
            return scratch.export_artboard_range(path, artboard_range(0), options)
        finally:
            scratch.close(save=False)


@dataclass
class StrategyResult:
    """导出结果"""
    strategy: str
    path: Path


class TwoPhaseExporter:
    """两段式导出器"""

    def __init__(
        self,
        primary: IExportStrategy | None = None,
        fallback: IExportStrategy | None = None,
    ):
        self.primary = primary or PrimaryExport()
        self.fallback = fallback or IsolatedCopyExport()

    def export(
        self,
        document: IDocument,
        artboard_index: int,
        path: Path,
        options: PDFExportOptions,
    ) -> StrategyResult:
        """
        导出单个画板

        Raises:
            FallbackExportError: 两种方式均失败
        """
        try:
            out = self.primary.export(document, artboard_index, path, options)
            return StrategyResult(strategy=self.primary.name, path=out)
        except ExportError as primary_error:
            logger.warning(f"画板 {artboard_index + 1} {primary_error}，尝试兜底导出")
            try:
                out = self.fallback.export(document, artboard_index, path, options)
            except Exception as e:
                raise FallbackExportError(
                    f"画板 {artboard_index + 1} 导出失败: {e}",
                    primary_error=primary_error,
                ) from e
            return StrategyResult(strategy=self.fallback.name, path=out)
