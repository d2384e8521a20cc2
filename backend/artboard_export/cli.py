"""
命令行入口 - 收集输出目录与导出开关后调用核心流程

用法：
    artboard-export poster.yaml out/ --no-hide-layers --thumbnails
    artboard-export poster.yaml --info

退出码：0 全部成功；1 部分/全部画板失败；2 前置条件或文档加载错误
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .adapters import FileDocument
from .config import RuntimeConfig, get_config, reload_config
from .interfaces import DocumentLoadError, PreconditionError
from .pipeline import run_export

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_PRECONDITION = 2


def setup_logging(config: RuntimeConfig, debug: bool = False) -> None:
    """按配置初始化日志（控制台 + 可选文件）"""
    level = logging.DEBUG if debug else getattr(logging, config.logging.log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.logging.log_to_file:
        log_file = Path(config.logging.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artboard-export",
        description="Export each artboard of a document to its own PDF.",
    )
    parser.add_argument("document", help="文档文件（YAML/JSON）")
    parser.add_argument("output_dir", nargs="?", default="", help="输出目录（须已存在）")
    parser.add_argument(
        "--hide-layers",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="隐藏与当前画板无关的图层（默认取配置）",
    )
    parser.add_argument(
        "--optimize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="优化PDF（默认取配置）",
    )
    parser.add_argument(
        "--thumbnails",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="生成缩略图（默认取配置）",
    )
    parser.add_argument("--debug", action="store_true", help="输出每个画板的详细信息")
    parser.add_argument("--config", default="", help="运行期配置YAML（默认：config/runtime.yaml）")
    parser.add_argument("--info", action="store_true", help="仅显示文档信息")
    return parser


def _pick(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = reload_config(args.config) if args.config else get_config()
    debug = args.debug or config.defaults.debug
    setup_logging(config, debug=debug)

    try:
        document = FileDocument.open(args.document)
    except DocumentLoadError as e:
        print(f"错误: {e}", file=sys.stderr)
        return EXIT_PRECONDITION

    if args.info:
        print(f"Document: {document.name}")
        print(f"Artboards: {len(document.list_artboards())}")
        document.close(save=False)
        return EXIT_OK

    try:
        report = run_export(
            document,
            args.output_dir,
            hide_layers=_pick(args.hide_layers, config.defaults.hide_layers),
            optimize=_pick(args.optimize, config.defaults.optimize),
            thumbnails=_pick(args.thumbnails, config.defaults.thumbnails),
            debug=debug,
            config=config,
        )
    except PreconditionError as e:
        print(f"错误: {e}", file=sys.stderr)
        return EXIT_PRECONDITION
    finally:
        document.close(save=False)

    print(report.summary())
    for failure in report.failures:
        print(f"  - 画板 {failure.artboard_index + 1} ({failure.artboard_name}): {failure.message}")

    return EXIT_OK if report.failed_count == 0 else EXIT_PARTIAL


if __name__ == "__main__":
    raise SystemExit(main())
