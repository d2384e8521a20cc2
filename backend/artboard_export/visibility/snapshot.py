"""
可见性快照 - 记录/恢复图层可见性

职责：
1. capture: 按展开顺序记录每个图层的 visible
2. restore: 仅恢复快照中存在的图层，其余不动
3. visibility_scope: 记录 → 修改 → 恢复（异常路径同样恢复）

快照键：
- path: 图层树路径（如 "0/2/1"），每个节点唯一
- name: 图层名；同名图层后者覆盖前者，恢复时同名图层取同一个值
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

from .layer_tree import LayerEntry

logger = logging.getLogger(__name__)


class SnapshotKey(str, Enum):
    """快照键模式"""
    PATH = "path"
    NAME = "name"


def _key_of(entry: LayerEntry, key: SnapshotKey) -> str:
    if key == SnapshotKey.NAME:
        return entry.layer.name
    return entry.path_key


@dataclass
class VisibilitySnapshot:
    """图层可见性快照"""
    key: SnapshotKey = SnapshotKey.PATH
    states: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def capture(
        cls,
        entries: Sequence[LayerEntry],
        key: SnapshotKey | str = SnapshotKey.PATH,
    ) -> VisibilitySnapshot:
        """记录当前可见性"""
        snapshot = cls(key=SnapshotKey(key))
        for entry in entries:
            snapshot.states[_key_of(entry, snapshot.key)] = bool(entry.layer.visible)

        if snapshot.key == SnapshotKey.NAME and len(snapshot.states) < len(entries):
            logger.warning(
                f"存在同名图层，按名称记录的快照只保留最后一个: "
                f"{len(entries)} 个图层 / {len(snapshot.states)} 个键"
            )
        return snapshot

    def restore(self, entries: Sequence[LayerEntry]) -> int:
        """恢复可见性，返回恢复的图层数"""
        restored = 0
        for entry in entries:
            k = _key_of(entry, self.key)
            if k in self.states:
                entry.layer.visible = self.states[k]
                restored += 1
        return restored

    def __len__(self) -> int:
        return len(self.states)


@contextmanager
def visibility_scope(
    entries: Sequence[LayerEntry],
    mutate: Callable[[], object] | None = None,
    key: SnapshotKey | str = SnapshotKey.PATH,
) -> Iterator[VisibilitySnapshot]:
    """
    可见性作用域：进入时记录并执行修改，退出时（含异常）恢复

    使用方式：
        with visibility_scope(entries, lambda: resolve_visibility(roots, rect)):
            document.export_artboard_range(...)
    """
    snapshot = VisibilitySnapshot.capture(entries, key=key)
    try:
        if mutate is not None:
            mutate()
        yield snapshot
    finally:
        restored = snapshot.restore(entries)
        logger.debug(f"已恢复图层可见性: {restored} 个")
