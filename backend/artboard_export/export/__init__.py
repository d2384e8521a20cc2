"""
导出模块 - 文件命名/导出策略/PDF渲染

子模块：
- naming: 文件名清洗与画板范围
- strategy: 直接导出 + 兜底导出
- pdf_engine: PDF渲染引擎（PyMuPDF）
"""

from .naming import artboard_file_name, artboard_range, parse_artboard_range, sanitize_name
from .pdf_engine import PDFRenderer
from .strategy import (
    IsolatedCopyExport,
    PrimaryExport,
    StrategyResult,
    TwoPhaseExporter,
)

__all__ = [
    "sanitize_name",
    "artboard_file_name",
    "artboard_range",
    "parse_artboard_range",
    "PDFRenderer",
    "PrimaryExport",
    "IsolatedCopyExport",
    "StrategyResult",
    "TwoPhaseExporter",
]
