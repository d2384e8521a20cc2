"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载导出默认值/PDF选项/渲染/日志等运行参数
- 提供环境变量覆盖机制（ARTBOARD_EXPORT_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ..models import PDFExportOptions

DEFAULT_CONFIG_PATH = Path("config/runtime.yaml")


class DefaultsConfig(BaseModel):
    """导出开关默认值（与原面板勾选状态一致）"""

    hide_layers: bool = True
    optimize: bool = True
    thumbnails: bool = False
    debug: bool = False


class PDFConfig(BaseModel):
    """PDF导出配置"""

    compatibility: str = "ACROBAT7"
    preserve_editability: bool = False
    artboard_clipping: bool = True
    view_clip: bool = True
    file_extension: str = ".pdf"
    fallback_name_prefix: str = "Artboard_"


class VisibilityConfig(BaseModel):
    """可见性快照配置"""

    # path: 按图层树路径记录（同名图层互不覆盖）；name: 按图层名记录
    snapshot_key: Literal["path", "name"] = "path"


class RenderConfig(BaseModel):
    """PDF渲染配置"""

    thumbnail_dpi: int = 36
    default_fill: str = "#000000"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "logs/artboard_export.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    pdf: PDFConfig = Field(default_factory=PDFConfig)
    visibility: VisibilityConfig = Field(default_factory=VisibilityConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "ARTBOARD_EXPORT_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """环境变量优先于YAML（YAML各段以构造参数传入）"""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        # 以字典传入，环境变量按字段逐项合并覆盖
        sections = {
            key: cls._extract(runtime_opts, key)
            for key in ("defaults", "pdf", "visibility", "render", "logging")
        }
        config = cls(**sections)

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """日志文件相对路径基于配置文件所在目录"""
        log_file = Path(self.logging.log_file)
        if not log_file.is_absolute():
            self.logging.log_file = str((base_dir / log_file).resolve())

    def pdf_options(self, optimize: bool, thumbnails: bool) -> PDFExportOptions:
        """组装单次导出的PDF选项"""
        return PDFExportOptions(
            optimize=optimize,
            generate_thumbnails=thumbnails,
            compatibility=self.pdf.compatibility,
            preserve_editability=self.pdf.preserve_editability,
            artboard_clipping=self.pdf.artboard_clipping,
            view_clip=self.pdf.view_clip,
        )


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
