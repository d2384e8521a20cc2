"""
PDF渲染引擎 - 将文档中的画板渲染为PDF

职责：
1. 按画板范围每个画板输出一页
2. 只绘制 自身及所有上级图层均可见 的可见元素（矩形填充）
3. 画板裁切/视图裁切、优化保存、缩略图
4. PDF页数计算

依赖：
- PyMuPDF (fitz): PDF生成与栅格化

坐标：文档坐标 y 轴向上，PDF页面坐标 y 轴向下，以页面框左上角为原点。

测试要点：
- test_export_single_artboard: 单画板单页
- test_hidden_layer_not_drawn: 隐藏图层不绘制
- test_range_out_of_bounds: 范围越界报错
- test_thumbnail_written: 缩略图输出
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import fitz  # type: ignore

from ..config import get_config
from ..interfaces import BoundsReadError, ExportError
from ..models import Document, Layer, PageItem, PDFExportOptions, Rect
from ..visibility.layer_tree import walk_layers
from .naming import parse_artboard_range

logger = logging.getLogger(__name__)

PRODUCER_NAME = "artboard-export"


def parse_fill(color: str) -> tuple[float, float, float]:
    """#RRGGBB -> (r, g, b)，分量 0~1"""
    value = (color or "").strip().lstrip("#")
    if len(value) != 6:
        raise ExportError(f"填充色格式错误: {color!r}")
    try:
        return tuple(int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError as e:
        raise ExportError(f"填充色格式错误: {color!r}") from e


def drawable_items(layers: Sequence[Layer]) -> list[tuple[PageItem, Rect]]:
    """
    收集可绘制元素（按图层先序、元素原顺序）

    图层自身或任一上级隐藏则整体跳过；边界不可读的元素跳过。
    """
    entries = walk_layers(layers)
    shown = [False] * len(entries)
    result: list[tuple[PageItem, Rect]] = []

    for position, entry in enumerate(entries):
        parent_shown = True if entry.parent is None else shown[entry.parent]
        shown[position] = parent_shown and entry.layer.visible
        if not shown[position]:
            continue
        for item in entry.layer.items:
            if not item.visible:
                continue
            try:
                result.append((item, Rect.from_bounds(item.bounds)))
            except BoundsReadError as e:
                logger.debug(f"跳过边界不可读元素 {item.name!r}: {e}")
    return result


class PDFRenderer:
    """PDF渲染器实现"""

    def __init__(self, thumbnail_dpi: int | None = None, default_fill: str | None = None):
        config = get_config()
        self.thumbnail_dpi = thumbnail_dpi or config.render.thumbnail_dpi
        self.default_fill = default_fill or config.render.default_fill

    def render(
        self,
        document: Document,
        path: Path,
        range_string: str,
        options: PDFExportOptions,
    ) -> Path:
        """
        按画板范围渲染PDF

        Raises:
            ExportError: 范围无效/画板几何无效/写出失败
        """
        indices = parse_artboard_range(range_string, len(document.artboards))
        items = drawable_items(document.layers)
        logger.debug(
            f"渲染 {path.name}: 画板 {range_string}, 可绘制元素 {len(items)} 个, "
            f"兼容性 {options.compatibility}"
        )

        pdf = fitz.open()
        try:
            for index in indices:
                self._render_page(pdf, document.artboards[index].rect, items, options)

            pdf.set_metadata({"title": document.name, "creator": PRODUCER_NAME})
            self._save(pdf, path, options)

            if options.generate_thumbnails:
                self._write_thumbnails(pdf, path)
        finally:
            pdf.close()

        return path

    def count_pages(self, pdf_path: Path) -> int:
        """计算PDF页数"""
        if not pdf_path.exists():
            raise ExportError(f"PDF文件不存在: {pdf_path}")
        with fitz.open(str(pdf_path)) as pdf:
            return pdf.page_count

    def _render_page(
        self,
        pdf,
        artboard_rect: Rect,
        items: list[tuple[PageItem, Rect]],
        options: PDFExportOptions,
    ) -> None:
        """绘制单个画板页面"""
        page_box = artboard_rect
        if not options.artboard_clipping:
            for _, rect in items:
                page_box = page_box.union(rect)

        if page_box.width <= 0 or page_box.height <= 0:
            raise ExportError(f"画板尺寸无效: {artboard_rect.as_bounds()}")

        page = pdf.new_page(width=page_box.width, height=page_box.height)

        for item, rect in items:
            if options.view_clip:
                rect = rect.clip(page_box)
                if rect is None:
                    continue
            target = fitz.Rect(
                rect.left - page_box.left,
                page_box.top - rect.top,
                rect.right - page_box.left,
                page_box.top - rect.bottom,
            )
            if target.is_empty:
                continue
            page.draw_rect(target, color=None, fill=parse_fill(item.fill or self.default_fill), width=0)

    def _save(self, pdf, path: Path, options: PDFExportOptions) -> None:
        try:
            if options.optimize:
                pdf.save(str(path), garbage=4, deflate=True, clean=True)
            else:
                pdf.save(str(path))
        except Exception as e:
            raise ExportError(f"PDF写出失败: {path}: {e}") from e

    def _write_thumbnails(self, pdf, path: Path) -> list[Path]:
        """缩略图与PDF同目录：<名称>_thumb.png（多页时追加页码）"""
        thumbs = []
        for i, page in enumerate(pdf):
            suffix = "" if pdf.page_count == 1 else f"_{i + 1}"
            thumb_path = path.with_name(f"{path.stem}_thumb{suffix}.png")
            page.get_pixmap(dpi=self.thumbnail_dpi).save(str(thumb_path))
            thumbs.append(thumb_path)
        return thumbs
