"""
图层可见性模块 - 按画板隐藏无关图层

子模块：
- bounds: 元素与画板相交判定
- layer_tree: 图层树先序展开
- snapshot: 可见性快照与作用域
- resolver: 可见性求解
"""

from .bounds import item_intersects_artboard
from .layer_tree import LayerEntry, flatten_layers, walk_layers
from .resolver import resolve_layer, resolve_visibility
from .snapshot import SnapshotKey, VisibilitySnapshot, visibility_scope

__all__ = [
    "item_intersects_artboard",
    "LayerEntry",
    "walk_layers",
    "flatten_layers",
    "resolve_layer",
    "resolve_visibility",
    "SnapshotKey",
    "VisibilitySnapshot",
    "visibility_scope",
]
