"""
文件名与画板范围

- 文件名：画板名中 [A-Za-z0-9_-] 以外的字符替换为 "_"；画板名为空时用 Artboard_<序号>
- 画板范围：1起，闭区间，"3-3" 表示只导出第3个画板
"""

from __future__ import annotations

import re

from ..interfaces import ExportError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


def sanitize_name(name: str) -> str:
    """替换文件名中的非安全字符"""
    return _UNSAFE_CHARS.sub("_", name)


def artboard_file_name(
    name: str | None,
    index: int,
    extension: str = ".pdf",
    fallback_prefix: str = "Artboard_",
) -> str:
    """
    生成画板输出文件名

    Args:
        name: 画板名（可为空）
        index: 画板索引（0起）
    """
    base = name or f"{fallback_prefix}{index + 1}"
    return sanitize_name(base) + extension


def artboard_range(index: int) -> str:
    """单画板范围字符串（index 为0起）"""
    return f"{index + 1}-{index + 1}"


def parse_artboard_range(range_string: str, artboard_count: int) -> list[int]:
    """
    解析画板范围为0起索引列表

    Raises:
        ExportError: 格式错误或越界
    """
    m = _RANGE_PATTERN.match(range_string or "")
    if not m:
        raise ExportError(f"画板范围格式错误: {range_string!r}")

    start = int(m.group(1))
    end = int(m.group(2)) if m.group(2) else start
    if start < 1 or end < start or end > artboard_count:
        raise ExportError(f"画板范围越界: {range_string} (共 {artboard_count} 个画板)")

    return list(range(start - 1, end))
