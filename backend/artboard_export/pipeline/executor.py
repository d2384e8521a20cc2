"""
导出编排器 - 逐画板导出PDF

职责：
1. 前置校验（有文档/有画板/输出目录存在），失败整批中止且不做任何修改
2. 逐画板：选中 → 隐藏无关图层 → 直接导出 → 兜底导出 → 恢复可见性 → 记录结果
3. 失败隔离（单画板失败不影响其余画板）
4. 结束时恢复整批开始前的图层可见性，返回报告

测试要点：
- test_precondition_no_document: 无文档中止
- test_partial_failure_isolation: 单画板失败隔离
- test_restore_after_exception: 异常路径恢复可见性
- test_scenario_two_artboards: 两画板可见性互斥且结束后复原
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from ..config import RuntimeConfig, get_config
from ..export import TwoPhaseExporter, artboard_file_name
from ..interfaces import FallbackExportError, IDocument, PreconditionError
from ..models import Artboard, ExportOutcome, PDFExportOptions, RunReport
from ..visibility import VisibilitySnapshot, visibility_scope, walk_layers
from ..visibility.resolver import resolve_entries
from .stages import ArtboardStage

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class ExportOrchestrator:
    """导出编排器"""

    def __init__(
        self,
        document: IDocument | None,
        config: RuntimeConfig | None = None,
        exporter: TwoPhaseExporter | None = None,
        progress_cb: ProgressCallback | None = None,
    ):
        self.document = document
        self.config = config or get_config()
        self.exporter = exporter or TwoPhaseExporter()
        self.progress_cb = progress_cb

    def run(
        self,
        output_dir: str | Path | None,
        hide_layers: bool = True,
        optimize: bool = True,
        thumbnails: bool = False,
        debug: bool = False,
    ) -> RunReport:
        """
        执行整批导出

        Raises:
            PreconditionError: 前置条件不满足
        """
        out_dir = self._validate(output_dir)
        document = self.document
        artboards = document.list_artboards()
        options = self.config.pdf_options(optimize=optimize, thumbnails=thumbnails)
        snapshot_key = self.config.visibility.snapshot_key

        report = RunReport(
            document_name=document.name,
            output_dir=out_dir,
            artboard_total=len(artboards),
        )
        logger.info(
            f"开始导出: {document.name}, 画板 {len(artboards)} 个 -> {out_dir} "
            f"(hide_layers={hide_layers}, optimize={optimize}, thumbnails={thumbnails})"
        )

        baseline = None
        if hide_layers:
            baseline = VisibilitySnapshot.capture(
                walk_layers(document.list_layers_tree()), key=snapshot_key
            )

        used_names: dict[str, int] = {}
        try:
            for i, artboard in enumerate(artboards):
                outcome = self._export_artboard(
                    i, len(artboards), artboard, out_dir, options, hide_layers, debug, used_names
                )
                report.record(outcome)
        finally:
            if baseline is not None:
                baseline.restore(walk_layers(document.list_layers_tree()))

        report.mark_finished()
        logger.info(report.summary())
        for failure in report.failures:
            logger.error(f"画板 {failure.artboard_index + 1} ({failure.artboard_name}): {failure.message}")
        return report

    def _validate(self, output_dir: str | Path | None) -> Path:
        """前置校验（不修改任何状态）"""
        if self.document is None or not self.document.is_open:
            raise PreconditionError("请先打开文档")
        if not self.document.list_artboards():
            raise PreconditionError("文档中没有画板")
        if output_dir is None or str(output_dir).strip() == "":
            raise PreconditionError("请先选择输出目录")
        out_dir = Path(output_dir)
        if not out_dir.is_dir():
            raise PreconditionError(f"输出目录不存在: {out_dir}")
        return out_dir

    def _export_artboard(
        self,
        index: int,
        total: int,
        artboard: Artboard,
        out_dir: Path,
        options: PDFExportOptions,
        hide_layers: bool,
        debug: bool,
        used_names: dict[str, int],
    ) -> ExportOutcome:
        """导出单个画板（异常在此边界内消化）"""
        label = artboard.label(self.config.pdf.fallback_name_prefix)
        outcome = ExportOutcome(artboard_index=index, artboard_name=label)
        stage = ArtboardStage.SELECT_ARTBOARD

        try:
            if self.progress_cb:
                self.progress_cb(index, total, label)
            self.document.set_active_artboard(index)
            file_name = artboard_file_name(
                artboard.name,
                index,
                extension=self.config.pdf.file_extension,
                fallback_prefix=self.config.pdf.fallback_name_prefix,
            )
            if file_name in used_names:
                logger.warning(
                    f"画板 {index + 1} 与画板 {used_names[file_name] + 1} 文件名相同，将覆盖: {file_name}"
                )
            used_names[file_name] = index
            path = out_dir / file_name

            log = logger.info if debug else logger.debug
            log(f"导出画板 {index + 1}: {label} -> {file_name}")

            stage = ArtboardStage.APPLY_VISIBILITY
            with self._visibility_window(artboard, label, hide_layers, debug):
                stage = ArtboardStage.EXPORT_PRIMARY
                result = self.exporter.export(self.document, index, path, options)
                stage = ArtboardStage.RESTORE_VISIBILITY

            stage = ArtboardStage.RECORD_OUTCOME
            outcome.success = True
            outcome.output_path = result.path
            outcome.strategy = result.strategy
            logger.info(f"画板 {index + 1} 导出成功({result.strategy}): {result.path}")

        except FallbackExportError as e:
            outcome.failed_stage = ArtboardStage.EXPORT_FALLBACK.value
            outcome.error = str(e)
            logger.error(f"画板 {index + 1} 直接导出与兜底导出均失败: {e}")

        except Exception as e:
            outcome.failed_stage = stage.value
            outcome.error = f"导出画板 {index + 1} 出错: {e}"
            logger.exception(f"画板 {index + 1} 阶段失败 {stage.value}")

        return outcome

    @contextmanager
    def _visibility_window(
        self, artboard: Artboard, label: str, hide_layers: bool, debug: bool
    ) -> Iterator[None]:
        """隐藏无关图层的作用域；未开启时不做任何修改"""
        if not hide_layers:
            yield
            return

        entries = walk_layers(self.document.list_layers_tree())

        def _apply() -> None:
            results = resolve_entries(entries, artboard.rect)
            if debug:
                shown = [e.layer.name for e, r in zip(entries, results) if r]
                logger.info(f"画板 {label} 显示图层: {shown}")

        with visibility_scope(entries, _apply, key=self.config.visibility.snapshot_key):
            yield


def run_export(
    document: IDocument | None,
    output_dir: str | Path | None,
    hide_layers: bool = True,
    optimize: bool = True,
    thumbnails: bool = False,
    debug: bool = False,
    config: RuntimeConfig | None = None,
    progress_cb: ProgressCallback | None = None,
) -> RunReport:
    """核心入口：逐画板导出PDF并返回报告"""
    orchestrator = ExportOrchestrator(document, config=config, progress_cb=progress_cb)
    return orchestrator.run(
        output_dir,
        hide_layers=hide_layers,
        optimize=optimize,
        thumbnails=thumbnails,
        debug=debug,
    )
