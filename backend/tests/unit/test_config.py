"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest

from yaml_cv.config import (
    FontConfig,
    RuntimeConfig,
    get_config,
    reload_config,
)
from yaml_cv.config import runtime_config as runtime_config_module

CONFIG_YAML = Path(__file__).resolve().parents[3] / "config" / "runtime.yaml"


class TestRuntimeConfig:
    """运行期配置测试"""

    def test_defaults(self, runtime_config: RuntimeConfig):
        assert runtime_config.page.width_mm == 210.0
        assert runtime_config.page.height_mm == 297.0
        assert runtime_config.page.margin_mm == 12.7
        assert runtime_config.photo.dpi == 75.0
        assert set(runtime_config.fonts.faces) == {"mincho", "gothic"}
        assert runtime_config.logging.log_level == "INFO"

    def test_font_paths(self):
        fonts = FontConfig(font_dir=Path("/fonts"), faces={"mincho": "a.ttf"})
        assert fonts.get_font_paths() == {"mincho": Path("/fonts/a.ttf")}

    def test_from_yaml(self):
        """加载仓库内的 runtime.yaml，相对路径按文件所在目录解析"""
        config = RuntimeConfig.from_yaml(CONFIG_YAML)
        assert config.page.margin_mm == 12.7
        assert config.page.title == "CV"
        assert config.fonts.faces == {"mincho": "ipaexm.ttf", "gothic": "ipaexg.ttf"}
        assert config.fonts.font_dir.is_absolute()
        assert config.fonts.font_dir == (CONFIG_YAML.parent / "../fonts").resolve()
        assert config.photo.path == (CONFIG_YAML.parent / "../photo.jpg").resolve()

    def test_from_yaml_plain_values(self, temp_dir: Path):
        """不带 default 包装的值同样可读"""
        path = temp_dir / "runtime.yaml"
        path.write_text(
            "runtime_options:\n"
            "  page:\n"
            "    margin_mm: 5\n"
            "  photo:\n"
            "    path: /abs/photo.png\n"
            "    dpi: 150\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.page.margin_mm == 5.0
        assert config.photo.path == Path("/abs/photo.png")
        assert config.photo.dpi == 150.0
        assert config.fonts.font_dir == (temp_dir / "fonts").resolve()

    def test_missing_file_uses_defaults(self, temp_dir: Path):
        config = RuntimeConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.page.margin_mm == 12.7
        assert config.photo.path == Path("photo.jpg")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("YAMLCV_PAGE__MARGIN_MM", "5")
        monkeypatch.setenv("YAMLCV_LOGGING__LOG_LEVEL", "DEBUG")
        config = RuntimeConfig()
        assert config.page.margin_mm == 5.0
        assert config.logging.log_level == "DEBUG"

    def test_env_overrides_yaml(self, monkeypatch):
        """环境变量优先于 runtime.yaml，同节其余字段仍取YAML值"""
        monkeypatch.setenv("YAMLCV_PAGE__MARGIN_MM", "5")
        monkeypatch.setenv("YAMLCV_PHOTO__DPI", "300")
        config = RuntimeConfig.from_yaml(CONFIG_YAML)
        assert config.page.margin_mm == 5.0
        assert config.page.title == "CV"
        assert config.page.width_mm == 210.0
        assert config.photo.dpi == 300.0
        assert config.photo.path == (CONFIG_YAML.parent / "../photo.jpg").resolve()

    def test_env_overrides_yaml_relative_path(self, monkeypatch, temp_dir: Path):
        """环境变量给出的相对路径同样按YAML所在目录解析"""
        path = temp_dir / "runtime.yaml"
        path.write_text("runtime_options:\n  page:\n    margin_mm: 0\n", encoding="utf-8")
        monkeypatch.setenv("YAMLCV_FONTS__FONT_DIR", "myfonts")
        config = RuntimeConfig.from_yaml(path)
        assert config.page.margin_mm == 0.0
        assert config.fonts.font_dir == (temp_dir / "myfonts").resolve()

    def test_get_config_honours_env(self, monkeypatch):
        monkeypatch.setattr(runtime_config_module, "_config", None)
        monkeypatch.setattr(runtime_config_module, "DEFAULT_RUNTIME_PATH", CONFIG_YAML)
        monkeypatch.setenv("YAMLCV_LOGGING__LOG_LEVEL", "WARNING")
        assert get_config().logging.log_level == "WARNING"


class TestGlobalConfig:
    """全局配置实例"""

    @pytest.fixture(autouse=True)
    def _reset(self, monkeypatch):
        monkeypatch.setattr(runtime_config_module, "_config", None)

    def test_reload_config(self):
        config = reload_config(CONFIG_YAML)
        assert get_config() is config
        assert config.fonts.font_dir.is_absolute()

    def test_get_config_is_cached(self, monkeypatch):
        monkeypatch.setattr(runtime_config_module, "DEFAULT_RUNTIME_PATH", CONFIG_YAML)
        assert get_config() is get_config()
