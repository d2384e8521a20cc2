"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Rect: 轴对齐边界框
- Document/Artboard/Layer/PageItem: 文档结构
- PDFExportOptions: 导出选项
- ExportOutcome/RunReport: 单画板结果与整批报告
"""

from .document import Artboard, Document, Layer, PageItem
from .geometry import Rect
from .report import (
    ArtboardFailure,
    ExportOutcome,
    PDFExportOptions,
    RunReport,
    RunStatus,
)

__all__ = [
    "Rect",
    "Document",
    "Artboard",
    "Layer",
    "PageItem",
    "PDFExportOptions",
    "ExportOutcome",
    "ArtboardFailure",
    "RunReport",
    "RunStatus",
]
