"""
导出模块单元测试（文件名/画板范围/两段式导出策略）

每个模块完成后必须运行：pytest backend/tests/unit/test_export.py -v
"""

import pytest

from artboard_export.export import (
    IsolatedCopyExport,
    PrimaryExport,
    TwoPhaseExporter,
    artboard_file_name,
    artboard_range,
    parse_artboard_range,
    sanitize_name,
)
from artboard_export.interfaces import ExportError, FallbackExportError, PrimaryExportError
from artboard_export.models import PDFExportOptions


class TestNaming:
    """文件名与画板范围测试"""

    def test_sanitize(self):
        assert sanitize_name("My Artboard #1") == "My_Artboard__1"
        assert sanitize_name("ok_name-2") == "ok_name-2"
        assert sanitize_name("封面/v2") == "___v2"

    def test_file_name(self):
        assert artboard_file_name("My Artboard #1", 0) == "My_Artboard__1.pdf"

    @pytest.mark.parametrize("name", ["", None])
    def test_file_name_fallback(self, name):
        """空画板名使用 Artboard_<序号>"""
        assert artboard_file_name(name, 2) == "Artboard_3.pdf"

    def test_range(self):
        assert artboard_range(0) == "1-1"
        assert artboard_range(4) == "5-5"

    def test_parse_range(self):
        assert parse_artboard_range("2-2", 3) == [1]
        assert parse_artboard_range("1-3", 3) == [0, 1, 2]
        assert parse_artboard_range(" 3 ", 3) == [2]

    @pytest.mark.parametrize("value", ["", "a-b", "0-1", "3-2", "2-4", "1-2-3"])
    def test_parse_range_invalid(self, value):
        with pytest.raises(ExportError):
            parse_artboard_range(value, 3)


class TestTwoPhaseExporter:
    """两段式导出测试"""

    @pytest.fixture
    def options(self) -> PDFExportOptions:
        return PDFExportOptions()

    def test_primary_success_skips_fallback(self, fake_document_cls, three_artboard_document, temp_dir, options):
        """直接导出成功时不复制文档"""
        doc = fake_document_cls(three_artboard_document)
        result = TwoPhaseExporter().export(doc, 1, temp_dir / "Second.pdf", options)

        assert result.strategy == "primary"
        assert result.path.exists()
        assert not any(call[0] == "duplicate" for call in doc.calls)
        assert ("export", False, "2-2", ("Second",)) in doc.calls

    def test_fallback_on_primary_failure(self, fake_document_cls, three_artboard_document, temp_dir, options):
        """直接导出失败时在副本中只保留目标画板导出"""
        doc = fake_document_cls(three_artboard_document, fail_primary={"Second"})
        result = TwoPhaseExporter().export(doc, 1, temp_dir / "Second.pdf", options)

        assert result.strategy == "fallback"
        assert result.path.exists()

        scratch = doc.scratches[0]
        assert [a.name for a in scratch.document.artboards] == ["Second"]
        # 从高到低删除其余画板
        assert [c[2] for c in doc.calls if c[0] == "remove"] == [2, 0]
        assert ("export", True, "1-1", ("Second",)) in doc.calls
        assert scratch.closed and not scratch.saved
        # 原文档不受影响
        assert len(doc.document.artboards) == 3

    def test_scratch_closed_when_fallback_fails(self, fake_document_cls, three_artboard_document, temp_dir, options):
        """兜底导出失败时副本同样不保存关闭"""
        doc = fake_document_cls(
            three_artboard_document, fail_primary={"Second"}, fail_fallback={"Second"}
        )
        with pytest.raises(FallbackExportError) as exc_info:
            TwoPhaseExporter().export(doc, 1, temp_dir / "Second.pdf", options)

        assert isinstance(exc_info.value.primary_error, PrimaryExportError)
        scratch = doc.scratches[0]
        assert scratch.closed and not scratch.saved
        assert doc.calls[-1] == ("close", True, False)
        assert not (temp_dir / "Second.pdf").exists()

    def test_primary_wraps_any_error(self, fake_document_cls, three_artboard_document, temp_dir, options):
        doc = fake_document_cls(three_artboard_document)

        def _export(*args, **kwargs):
            raise OSError("disk full")

        doc.export_artboard_range = _export
        with pytest.raises(PrimaryExportError):
            PrimaryExport().export(doc, 0, temp_dir / "x.pdf", options)

    def test_isolated_copy_closes_on_setup_error(self, fake_document_cls, three_artboard_document, temp_dir, options):
        """副本准备阶段出错也会关闭副本"""
        doc = fake_document_cls(three_artboard_document)
        with pytest.raises(IndexError):
            IsolatedCopyExport().export(_BrokenRemove(doc), 1, temp_dir / "x.pdf", options)
        assert doc.scratches[0].closed


class _BrokenRemove:
    """duplicate 出的副本删除画板时报错"""

    def __init__(self, inner):
        self.inner = inner

    def duplicate(self):
        scratch = self.inner.duplicate()

        def _remove(index: int) -> None:
            raise IndexError(index)

        scratch.remove_artboard = _remove
        return scratch

