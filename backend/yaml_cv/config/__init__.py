"""
配置层 - 加载运行期配置与输入数据

职责：
- 加载 config/runtime.yaml（页面/字体/照片/日志）
- 加载 data.yaml（履历数据）
- 提供类型安全的配置访问接口
"""

from .data_loader import CVDataLoader, load_cv_data
from .runtime_config import (
    FontConfig,
    LoggingConfig,
    PageConfig,
    PhotoConfig,
    RuntimeConfig,
    get_config,
    reload_config,
)

__all__ = [
    "CVDataLoader",
    "load_cv_data",
    "RuntimeConfig",
    "PageConfig",
    "FontConfig",
    "PhotoConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
]
