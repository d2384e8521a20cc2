"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest

from artboard_export.config import RuntimeConfig

REPO_CONFIG = Path(__file__).resolve().parents[3] / "config" / "runtime.yaml"


class TestRuntimeConfig:
    """运行期配置测试"""

    def test_default_config(self, runtime_config: RuntimeConfig):
        """测试默认配置（与原面板勾选一致）"""
        assert runtime_config.defaults.hide_layers is True
        assert runtime_config.defaults.optimize is True
        assert runtime_config.defaults.thumbnails is False
        assert runtime_config.pdf.compatibility == "ACROBAT7"
        assert runtime_config.visibility.snapshot_key == "path"

    def test_missing_file_falls_back_to_defaults(self, temp_dir: Path):
        config = RuntimeConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.pdf.file_extension == ".pdf"

    def test_from_yaml_default_wrapped_values(self, temp_dir: Path):
        """测试 {default: ...} 写法与直接写值"""
        path = temp_dir / "runtime.yaml"
        path.write_text(
            "runtime_options:\n"
            "  defaults:\n"
            "    optimize:\n"
            "      default: false\n"
            "      desc: x\n"
            "    thumbnails: true\n"
            "  visibility:\n"
            "    snapshot_key: name\n"
            "  logging:\n"
            "    log_file: logs/run.log\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.defaults.optimize is False
        assert config.defaults.thumbnails is True
        assert config.visibility.snapshot_key == "name"
        assert Path(config.logging.log_file).is_absolute()
        assert Path(config.logging.log_file).name == "run.log"

    def test_invalid_snapshot_key_rejected(self, temp_dir: Path):
        path = temp_dir / "runtime.yaml"
        path.write_text("runtime_options:\n  visibility:\n    snapshot_key: id\n", encoding="utf-8")
        with pytest.raises(ValueError):
            RuntimeConfig.from_yaml(path)

    def test_repo_config_loads(self):
        """测试仓库自带配置"""
        config = RuntimeConfig.from_yaml(REPO_CONFIG)
        assert config.defaults.hide_layers is True
        assert config.render.thumbnail_dpi == 36

    def test_pdf_options(self, runtime_config: RuntimeConfig):
        """测试导出选项组装"""
        options = runtime_config.pdf_options(optimize=False, thumbnails=True)
        assert options.optimize is False
        assert options.generate_thumbnails is True
        assert options.artboard_clipping is True
        assert options.view_clip is True
        assert options.preserve_editability is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("ARTBOARD_EXPORT_PDF__COMPATIBILITY", "ACROBAT5")
        assert RuntimeConfig().pdf.compatibility == "ACROBAT5"

    def test_env_override_beats_yaml(self, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖YAML中的同名项，其余项仍取YAML"""
        monkeypatch.setenv("ARTBOARD_EXPORT_PDF__COMPATIBILITY", "ACROBAT5")
        monkeypatch.setenv("ARTBOARD_EXPORT_VISIBILITY__SNAPSHOT_KEY", "name")
        config = RuntimeConfig.from_yaml(REPO_CONFIG)

        assert config.pdf.compatibility == "ACROBAT5"
        assert config.visibility.snapshot_key == "name"
        assert config.pdf.fallback_name_prefix == "Artboard_"
        assert config.render.thumbnail_dpi == 36

    def test_repo_log_file_inside_repo(self):
        """测试仓库配置的日志文件落在仓库内"""
        config = RuntimeConfig.from_yaml(REPO_CONFIG)
        repo_root = REPO_CONFIG.parents[1]
        assert Path(config.logging.log_file).is_relative_to(repo_root)
