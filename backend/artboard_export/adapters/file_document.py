"""
文件文档适配器 - 以 YAML/JSON 描述的文档

职责：
1. 加载文档文件为 Document 模型
2. 实现 IDocument（画板/图层访问、复制、删画板、关闭）
3. 导出委托 PDFRenderer

测试要点：
- test_load_yaml_document: 加载文档
- test_duplicate_is_independent: 副本修改不影响原文档
- test_close_without_saving: 不保存关闭不写回源文件
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..export.pdf_engine import PDFRenderer
from ..interfaces import DocumentLoadError, ExportError, IDocument
from ..models import Artboard, Document, Layer, PDFExportOptions

logger = logging.getLogger(__name__)


def load_document(path: str | Path) -> Document:
    """
    从YAML/JSON文件加载文档

    Raises:
        DocumentLoadError: 文件不存在/解析失败/结构不合法
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentLoadError(f"文档文件不存在: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"文档解析失败: {path}: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoadError(f"文档顶层应为映射: {path}")

    data.setdefault("name", path.name)
    try:
        return Document(**data)
    except ValidationError as e:
        raise DocumentLoadError(f"文档结构不合法: {path}: {e}") from e


class FileDocument(IDocument):
    """文件文档适配器实现"""

    def __init__(
        self,
        document: Document,
        source_path: Path | None = None,
        renderer: PDFRenderer | None = None,
    ):
        self.document = document
        self.source_path = source_path
        self.renderer = renderer or PDFRenderer()
        self.closed = False

    @classmethod
    def open(cls, path: str | Path, renderer: PDFRenderer | None = None) -> FileDocument:
        """打开文档文件"""
        path = Path(path)
        return cls(load_document(path), source_path=path, renderer=renderer)

    @property
    def name(self) -> str:
        return self.document.name

    @property
    def active_artboard_index(self) -> int:
        return self.document.active_artboard_index

    @property
    def is_open(self) -> bool:
        return not self.closed

    def list_artboards(self) -> list[Artboard]:
        return list(self.document.artboards)

    def set_active_artboard(self, index: int) -> None:
        if not 0 <= index < len(self.document.artboards):
            raise IndexError(f"画板索引越界: {index}")
        self.document.active_artboard_index = index

    def list_layers_tree(self) -> list[Layer]:
        return self.document.layers

    def export_artboard_range(
        self,
        path: Path,
        range_string: str,
        options: PDFExportOptions,
    ) -> Path:
        if self.closed:
            raise ExportError(f"文档已关闭: {self.name}")
        return self.renderer.render(self.document, Path(path), range_string, options)

    def duplicate(self) -> FileDocument:
        """深拷贝为临时文档（无源文件，不可写回）"""
        copy = self.document.model_copy(deep=True)
        return FileDocument(copy, source_path=None, renderer=self.renderer)

    def remove_artboard(self, index: int) -> None:
        self.document.remove_artboard(index)

    def close(self, save: bool = False) -> None:
        if save and self.source_path is not None:
            with open(self.source_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self.document.model_dump(mode="json"),
                    f,
                    allow_unicode=True,
                    sort_keys=False,
                )
            logger.info(f"文档已保存: {self.source_path}")
        self.closed = True
