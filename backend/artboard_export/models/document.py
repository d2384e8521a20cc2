"""
文档模型 - 画板/图层/页面元素

对应文档文件（YAML/JSON）的结构：
    name: poster.ai
    artboards:
      - name: Front
        artboard_rect: [0, 100, 100, 0]
    layers:
      - name: Background
        visible: true
        items:
          - bounds: [10, 20, 20, 10]
        children: [...]
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from .geometry import Rect


class PageItem(BaseModel):
    """页面元素（图层内容）"""
    name: str = ""
    visible: bool = True
    # 可见边界 [left, top, right, bottom]；不做校验，读取失败由相交判定兜底
    bounds: Any = Field(None, description="可见边界")
    fill: str = Field("#000000", description="填充色(#RRGGBB)")


class Layer(BaseModel):
    """图层（可任意层级嵌套）"""
    name: str = ""
    visible: bool = True
    items: list[PageItem] = Field(default_factory=list)
    children: list[Layer] = Field(default_factory=list)


class Artboard(BaseModel):
    """画板"""
    index: int = 0
    name: str = ""
    artboard_rect: list[float] = Field(..., description="两个对角点 [x1, y1, x2, y2]")

    @property
    def rect(self) -> Rect:
        """归一化后的画板矩形"""
        return Rect.from_bounds(self.artboard_rect)

    @property
    def display_name(self) -> str:
        return self.label()

    def label(self, fallback_prefix: str = "Artboard_") -> str:
        """画板名；为空时用 前缀+序号(1起)"""
        return self.name or f"{fallback_prefix}{self.index + 1}"


class Document(BaseModel):
    """多画板矢量文档"""
    name: str = "Untitled"
    artboards: list[Artboard] = Field(default_factory=list)
    layers: list[Layer] = Field(default_factory=list)
    active_artboard_index: int = 0

    @model_validator(mode="after")
    def _renumber(self) -> Document:
        self.renumber_artboards()
        return self

    def renumber_artboards(self) -> None:
        """画板 index 与列表位置保持一致"""
        for i, artboard in enumerate(self.artboards):
            artboard.index = i

    def remove_artboard(self, index: int) -> None:
        """删除画板并修正活动画板索引"""
        if not 0 <= index < len(self.artboards):
            raise IndexError(f"画板索引越界: {index}")
        del self.artboards[index]
        self.renumber_artboards()
        if self.active_artboard_index > index:
            self.active_artboard_index -= 1
        if self.active_artboard_index >= len(self.artboards):
            self.active_artboard_index = max(0, len(self.artboards) - 1)


Layer.model_rebuild()
