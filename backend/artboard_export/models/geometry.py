"""
几何模型 - 轴对齐矩形

坐标约定与画板一致：y 轴向上，top >= bottom，right >= left。
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..interfaces import BoundsReadError


class Rect(BaseModel):
    """边界框（left, top, right, bottom）"""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_bounds(cls, bounds: Sequence[Any] | None) -> Rect:
        """
        由两个对角点构造并归一化

        Args:
            bounds: [x1, y1, x2, y2]

        Raises:
            BoundsReadError: 缺失/类型不对/长度不对/非数值/非有限值
        """
        if bounds is None:
            raise BoundsReadError("边界缺失")
        # 字符串可迭代，"1234" 会被逐字符读成四个数
        if isinstance(bounds, (str, bytes, bytearray, Mapping)):
            raise BoundsReadError(f"边界类型不可读: {bounds!r}")
        try:
            values = [float(v) for v in bounds]
        except (TypeError, ValueError) as e:
            raise BoundsReadError(f"边界不可读: {bounds!r}") from e
        if len(values) != 4:
            raise BoundsReadError(f"边界长度应为4: {bounds!r}")
        if not all(math.isfinite(v) for v in values):
            raise BoundsReadError(f"边界含非有限值: {bounds!r}")

        x1, y1, x2, y2 = values
        return cls(
            left=min(x1, x2),
            top=max(y1, y2),
            right=max(x1, x2),
            bottom=min(y1, y2),
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def intersects(self, other: Rect) -> bool:
        """判断是否相交（边界接触也算相交）"""
        return not (
            self.right < other.left or
            self.left > other.right or
            self.bottom > other.top or
            self.top < other.bottom
        )

    def union(self, other: Rect) -> Rect:
        """边界框并集"""
        return Rect(
            left=min(self.left, other.left),
            top=max(self.top, other.top),
            right=max(self.right, other.right),
            bottom=min(self.bottom, other.bottom),
        )

    def clip(self, other: Rect) -> Rect | None:
        """与另一矩形求交，不相交返回None"""
        if not self.intersects(other):
            return None
        return Rect(
            left=max(self.left, other.left),
            top=min(self.top, other.top),
            right=min(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )

    def as_bounds(self) -> list[float]:
        return [self.left, self.top, self.right, self.bottom]
