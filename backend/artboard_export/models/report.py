"""
导出结果模型 - 单画板结果与整批报告

报告只返回给调用方（CLI/面板）渲染，核心流程不做持久化。
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class RunStatus(str, Enum):
    """整批状态"""
    RUNNING = "running"
    SUCCEEDED = "succeeded"   # 全部导出成功
    PARTIAL = "partial"       # 部分画板失败
    FAILED = "failed"         # 全部画板失败


class PDFExportOptions(BaseModel):
    """PDF导出选项"""
    optimize: bool = True
    generate_thumbnails: bool = False
    compatibility: str = "ACROBAT7"
    preserve_editability: bool = False
    artboard_clipping: bool = True
    view_clip: bool = True


class ExportOutcome(BaseModel):
    """单画板导出结果"""
    artboard_index: int
    artboard_name: str
    success: bool = False
    output_path: Path | None = None
    strategy: str | None = Field(None, description="产出文件的策略(primary/fallback)")
    failed_stage: str | None = None
    error: str | None = None


class ArtboardFailure(BaseModel):
    """失败明细"""
    artboard_index: int
    artboard_name: str
    message: str


class RunReport(BaseModel):
    """整批导出报告"""
    document_name: str
    output_dir: Path
    artboard_total: int = 0
    status: RunStatus = RunStatus.RUNNING
    outcomes: list[ExportOutcome] = Field(default_factory=list)

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def exported_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def failures(self) -> list[ArtboardFailure]:
        return [
            ArtboardFailure(
                artboard_index=o.artboard_index,
                artboard_name=o.artboard_name,
                message=o.error or "未知错误",
            )
            for o in self.outcomes
            if not o.success
        ]

    def record(self, outcome: ExportOutcome) -> None:
        self.outcomes.append(outcome)

    def mark_finished(self) -> None:
        """根据结果确定最终状态"""
        self.finished_at = datetime.now()
        if self.failed_count == 0:
            self.status = RunStatus.SUCCEEDED
        elif self.exported_count == 0:
            self.status = RunStatus.FAILED
        else:
            self.status = RunStatus.PARTIAL

    def summary(self) -> str:
        """一行摘要（供调用方展示）"""
        return (
            f"导出完成: {self.exported_count}/{self.artboard_total} 个画板 -> {self.output_dir}"
            + (f"，失败 {self.failed_count} 个" if self.failed_count else "")
        )
