"""
可见性求解 - 按画板决定每个图层的显示状态

规则（逐图层）：
1. items_visible: 图层内存在 可见 且 与画板相交 的元素
2. children_visible: 任一子图层（同规则）有内容；子图层一律参与求解，
   不看其当前 visible
3. has_content = items_visible OR children_visible
4. layer.visible = has_content（直接覆盖）

实现：在先序展开列表上逆序遍历，子节点总在父节点之前完成，无递归。

测试要点：
- test_scenario_two_artboards: 两画板互斥显示
- test_deterministic: 同一输入结果一致
- test_hidden_child_with_content: 隐藏的子图层有内容时被显示
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..interfaces import ILayerNode
from ..models import Rect
from .bounds import layer_has_visible_item
from .layer_tree import LayerEntry, walk_layers

logger = logging.getLogger(__name__)


def resolve_entries(entries: Sequence[LayerEntry], artboard_rect: Rect) -> list[bool]:
    """
    对展开列表求解并写回 visible

    Returns:
        与 entries 一一对应的 has_content
    """
    has_content = [False] * len(entries)
    children_visible = [False] * len(entries)

    for position in range(len(entries) - 1, -1, -1):
        entry = entries[position]
        items_visible = layer_has_visible_item(entry.layer.items or [], artboard_rect)
        content = items_visible or children_visible[position]

        entry.layer.visible = content
        has_content[position] = content
        if content and entry.parent is not None:
            children_visible[entry.parent] = True

    return has_content


def resolve_visibility(roots: Sequence[ILayerNode], artboard_rect: Rect) -> dict[str, bool]:
    """
    对所有顶层图层（及其子图层）求解可见性

    Returns:
        路径键 -> has_content
    """
    entries = walk_layers(roots)
    results = resolve_entries(entries, artboard_rect)
    shown = sum(results)
    logger.debug(f"可见性求解完成: 显示 {shown} / {len(entries)} 个图层")
    return {entry.path_key: content for entry, content in zip(entries, results)}


def resolve_layer(layer: ILayerNode, artboard_rect: Rect) -> bool:
    """对单个图层子树求解，返回该图层是否有内容"""
    entries = walk_layers([layer])
    return resolve_entries(entries, artboard_rect)[0]
