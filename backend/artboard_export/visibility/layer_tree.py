"""
图层树展开 - 深度优先先序遍历

职责：
1. 将任意深度的图层树展开为有序列表（父在子前，子按原顺序）
2. 记录每个节点的树路径/父节点位置/深度，供快照和可见性求解使用

使用显式栈遍历，不受递归深度限制。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..interfaces import ILayerNode


@dataclass(frozen=True)
class LayerEntry:
    """展开后的图层节点"""
    layer: ILayerNode
    path: tuple[int, ...]    # 从顶层开始的兄弟序号
    parent: int | None       # 父节点在展开列表中的位置
    depth: int

    @property
    def path_key(self) -> str:
        return "/".join(str(i) for i in self.path)


def walk_layers(roots: Sequence[ILayerNode]) -> list[LayerEntry]:
    """先序展开图层树"""
    entries: list[LayerEntry] = []
    stack: list[tuple[ILayerNode, tuple[int, ...], int | None]] = [
        (layer, (i,), None) for i, layer in reversed(list(enumerate(roots)))
    ]

    while stack:
        layer, path, parent = stack.pop()
        position = len(entries)
        entries.append(LayerEntry(layer=layer, path=path, parent=parent, depth=len(path) - 1))

        children = list(layer.children or [])
        for i in range(len(children) - 1, -1, -1):
            stack.append((children[i], path + (i,), position))

    return entries


def flatten_layers(roots: Sequence[ILayerNode]) -> list[ILayerNode]:
    """先序展开，只返回图层本身"""
    return [entry.layer for entry in walk_layers(roots)]
