"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 核心流程只通过接口访问文档，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from artboard_export.interfaces import IDocument

    class MyDocument(IDocument):
        def list_artboards(self) -> list[Artboard]:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import Artboard, Layer, PDFExportOptions


# ============================================================================
# 图层树节点协议（可见性求解只依赖这些属性）
# ============================================================================

class IPageItem(Protocol):
    """页面元素协议"""

    visible: bool
    bounds: Any  # [left, top, right, bottom]，可能缺失或不可读


class ILayerNode(Protocol):
    """图层节点协议"""

    name: str
    visible: bool

    @property
    def items(self) -> Sequence[IPageItem]: ...

    @property
    def children(self) -> Sequence[ILayerNode]: ...


# ============================================================================
# 文档适配器接口
# ============================================================================

class IDocument(ABC):
    """文档适配器接口 - 画板/图层访问与导出"""

    @property
    @abstractmethod
    def name(self) -> str:
        """文档名称"""
        ...

    @property
    @abstractmethod
    def active_artboard_index(self) -> int:
        """当前活动画板索引（0起）"""
        ...

    @property
    def is_open(self) -> bool:
        """文档是否仍可操作（关闭后为 False）"""
        return True

    @abstractmethod
    def list_artboards(self) -> list[Artboard]:
        """
        按顺序列出所有画板

        Returns:
            画板列表（index 与列表位置一致）
        """
        ...

    @abstractmethod
    def set_active_artboard(self, index: int) -> None:
        """设置活动画板"""
        ...

    @abstractmethod
    def list_layers_tree(self) -> list[Layer]:
        """
        获取顶层图层集合

        返回的是文档内的实时节点，修改 visible 直接作用于文档。
        """
        ...

    @abstractmethod
    def export_artboard_range(
        self,
        path: Path,
        range_string: str,
        options: PDFExportOptions,
    ) -> Path:
        """
        按画板范围导出PDF

        Args:
            path: 输出文件路径
            range_string: 画板范围（1起，如 "3-3"）
            options: PDF导出选项

        Returns:
            实际写出的文件路径

        Raises:
            ExportError: 导出失败
        """
        ...

    @abstractmethod
    def duplicate(self) -> IDocument:
        """复制整个文档（返回临时文档句柄）"""
        ...

    @abstractmethod
    def remove_artboard(self, index: int) -> None:
        """删除指定画板"""
        ...

    @abstractmethod
    def close(self, save: bool = False) -> None:
        """关闭文档（save=False 时丢弃修改）"""
        ...


class IExportStrategy(ABC):
    """单画板导出策略接口"""

    name: str

    @abstractmethod
    def export(
        self,
        document: IDocument,
        artboard_index: int,
        path: Path,
        options: PDFExportOptions,
    ) -> Path:
        """
        导出单个画板

        Raises:
            ExportError: 导出失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class ArtboardExportError(Exception):
    """基础异常"""
    pass


class PreconditionError(ArtboardExportError):
    """前置条件不满足（无文档/无画板/输出目录无效），整批中止"""
    pass


class DocumentLoadError(ArtboardExportError):
    """文档文件加载错误"""
    pass


class BoundsReadError(ArtboardExportError):
    """元素边界不可读"""
    pass


class ExportError(ArtboardExportError):
    """导出错误"""
    pass


class PrimaryExportError(ExportError):
    """直接导出失败（将尝试兜底导出）"""
    pass


class FallbackExportError(ExportError):
    """兜底导出也失败（记为单画板失败，不中断整批）"""

    def __init__(self, message: str, primary_error: BaseException | None = None):
        super().__init__(message)
        self.primary_error = primary_error
