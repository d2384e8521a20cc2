"""
相交判定 - 页面元素是否落在画板范围内

规则：NOT (右 < 画板左 OR 左 > 画板右 OR 下 > 画板上 OR 上 < 画板下)，
边界接触算相交。元素边界读取失败时按不相交处理（隐藏优先，避免串入无关内容）。
"""

from __future__ import annotations

import logging

from ..interfaces import IPageItem
from ..models import Rect

logger = logging.getLogger(__name__)


def read_item_rect(item: IPageItem) -> Rect:
    """读取元素可见边界，失败抛 BoundsReadError"""
    return Rect.from_bounds(item.bounds)


def item_intersects_artboard(item: IPageItem, artboard_rect: Rect) -> bool:
    """判断元素边界是否与画板相交（不可读按 False）"""
    try:
        item_rect = read_item_rect(item)
    except Exception as e:  # noqa: BLE001
        logger.debug(f"元素边界不可读，视为不相交: {e}")
        return False
    return item_rect.intersects(artboard_rect)


def layer_has_visible_item(items, artboard_rect: Rect) -> bool:
    """图层内是否存在可见且与画板相交的元素（命中即返回）"""
    return any(
        item.visible and item_intersects_artboard(item, artboard_rect)
        for item in items
    )
