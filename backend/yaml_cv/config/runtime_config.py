"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载页面/字体/照片/日志等运行参数
- 提供环境变量覆盖机制（YAMLCV_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

DEFAULT_RUNTIME_PATH = Path("config/runtime.yaml")
CONFIG_SECTIONS = ("page", "fonts", "photo", "logging")


class PageConfig(BaseModel):
    """页面配置（A4，单位mm）"""

    width_mm: float = 210.0
    height_mm: float = 297.0
    margin_mm: float = 12.7
    title: str = "CV"


class FontConfig(BaseModel):
    """字体注册表：字体名 -> TTF文件"""

    font_dir: Path = Path("fonts")
    faces: dict[str, str] = Field(
        default_factory=lambda: {"mincho": "ipaexm.ttf", "gothic": "ipaexg.ttf"}
    )

    def get_font_paths(self) -> dict[str, Path]:
        """字体名 -> 完整路径"""
        return {name: self.font_dir / filename for name, filename in self.faces.items()}


class PhotoConfig(BaseModel):
    """照片配置"""

    path: Path = Path("photo.jpg")
    dpi: float = 75.0


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "yaml_cv.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    page: PageConfig = Field(default_factory=PageConfig)
    fonts: FontConfig = Field(default_factory=FontConfig)
    photo: PhotoConfig = Field(default_factory=PhotoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "YAMLCV_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
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
        """优先级：环境变量 > YAML/构造参数"""
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

        # 以字典传入，环境变量按字段深度合并覆盖
        config = cls(
            **{key: cls._extract(runtime_opts, key) for key in CONFIG_SECTIONS if key in runtime_opts}
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if not self.fonts.font_dir.is_absolute():
            self.fonts.font_dir = (base_dir / self.fonts.font_dir).resolve()
        if not self.photo.path.is_absolute():
            self.photo.path = (base_dir / self.photo.path).resolve()


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_RUNTIME_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
