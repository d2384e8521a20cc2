"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(scenario_document, fake_document_cls):
        doc = fake_document_cls(scenario_document)
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from artboard_export.config import RuntimeConfig
from artboard_export.export.naming import parse_artboard_range
from artboard_export.interfaces import ExportError, IDocument
from artboard_export.models import (
    Artboard,
    Document,
    Layer,
    PageItem,
    PDFExportOptions,
)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def name_keyed_config() -> RuntimeConfig:
    """按图层名记录快照的配置"""
    config = RuntimeConfig()
    config.visibility.snapshot_key = "name"
    return config


# ============================================================================
# 文档 Fixtures
# ============================================================================

def make_item(left: float, bottom: float, right: float, top: float, **kwargs) -> PageItem:
    """按 左/下/右/上 构造元素（bounds 为 [left, top, right, bottom]）"""
    return PageItem(bounds=[left, top, right, bottom], **kwargs)


@pytest.fixture
def item_factory():
    """元素构造函数"""
    return make_item


@pytest.fixture
def scenario_document() -> Document:
    """
    两画板场景：
    A1: x∈[0,100], y∈[0,100]；A2: x∈[100,200], y∈[0,100]
    L1 元素只在A1内；L2 元素只在A2内
    """
    return Document(
        name="scenario",
        artboards=[
            Artboard(name="A1", artboard_rect=[0, 100, 100, 0]),
            Artboard(name="A2", artboard_rect=[100, 100, 200, 0]),
        ],
        layers=[
            Layer(name="L1", items=[make_item(10, 10, 20, 20)]),
            Layer(name="L2", items=[make_item(150, 10, 160, 20)]),
        ],
    )


@pytest.fixture
def three_artboard_document() -> Document:
    """三画板文档（每个画板一个图层）"""
    return Document(
        name="three",
        artboards=[
            Artboard(name="First", artboard_rect=[0, 100, 100, 0]),
            Artboard(name="Second", artboard_rect=[200, 100, 300, 0]),
            Artboard(name="Third", artboard_rect=[400, 100, 500, 0]),
        ],
        layers=[
            Layer(name="P1", items=[make_item(10, 10, 20, 20)]),
            Layer(name="P2", items=[make_item(210, 10, 220, 20)]),
            Layer(name="P3", items=[make_item(410, 10, 420, 20)]),
        ],
    )


# ============================================================================
# 假文档适配器
# ============================================================================

class FakeDocument(IDocument):
    """
    记录调用的文档适配器

    - fail_primary / fail_fallback: 按画板名注入导出失败
    - exports: 每次成功导出时各图层（按名称）的可见性
    - calls: 调用记录（duplicate/close/export 等）
    """

    def __init__(
        self,
        document: Document,
        fail_primary: set[str] | None = None,
        fail_fallback: set[str] | None = None,
        calls: list[tuple] | None = None,
        is_scratch: bool = False,
    ):
        self.document = document
        self.fail_primary = fail_primary or set()
        self.fail_fallback = fail_fallback or set()
        self.calls = calls if calls is not None else []
        self.is_scratch = is_scratch
        self.exports: list[dict] = []
        self.scratches: list[FakeDocument] = []
        self.closed = False
        self.saved = False

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
        self.calls.append(("set_active", self.is_scratch, index))
        self.document.active_artboard_index = index

    def list_layers_tree(self) -> list[Layer]:
        return self.document.layers

    def export_artboard_range(self, path: Path, range_string: str, options: PDFExportOptions) -> Path:
        indices = parse_artboard_range(range_string, len(self.document.artboards))
        names = [self.document.artboards[i].name for i in indices]
        self.calls.append(("export", self.is_scratch, range_string, tuple(names)))

        failing = self.fail_fallback if self.is_scratch else self.fail_primary
        if failing.intersection(names):
            raise ExportError(f"injected failure: {names}")

        self.exports.append(self._visible_by_name(self.document.layers))
        Path(path).write_bytes(b"%PDF-fake")
        return Path(path)

    def duplicate(self) -> FakeDocument:
        self.calls.append(("duplicate", self.is_scratch))
        scratch = FakeDocument(
            self.document.model_copy(deep=True),
            fail_primary=self.fail_primary,
            fail_fallback=self.fail_fallback,
            calls=self.calls,
            is_scratch=True,
        )
        self.scratches.append(scratch)
        return scratch

    def remove_artboard(self, index: int) -> None:
        self.calls.append(("remove", self.is_scratch, index))
        self.document.remove_artboard(index)

    def close(self, save: bool = False) -> None:
        self.calls.append(("close", self.is_scratch, save))
        self.closed = True
        self.saved = save

    @staticmethod
    def _visible_by_name(layers: list[Layer]) -> dict[str, bool]:
        result = {}
        stack = list(layers)
        while stack:
            layer = stack.pop()
            result[layer.name] = layer.visible
            stack.extend(layer.children)
        return result


@pytest.fixture
def fake_document_cls() -> type[FakeDocument]:
    return FakeDocument


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
