"""
数据加载器 - 读取履历数据 data.yaml

职责：
- 解析YAML并校验为 CVData
- 缺失字段在渲染开始前报错

使用方式：
    data = CVDataLoader().load("data.yaml")
    print(data.name)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..interfaces import DataLoadError, IDataLoader, ResourceError
from ..models import CVData

logger = logging.getLogger(__name__)


class CVDataLoader(IDataLoader):
    """履历数据加载器"""

    def load(self, path: str | Path) -> CVData:
        """加载并校验数据文件"""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ResourceError(f"数据文件无法读取: {path}: {e}") from e
        except yaml.YAMLError as e:
            raise DataLoadError(f"数据文件YAML格式错误: {path}: {e}") from e

        if not isinstance(data, dict):
            raise DataLoadError(f"数据文件顶层必须是映射: {path}")

        try:
            record = CVData(**data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise DataLoadError(f"数据文件字段错误: {path}: {problems}") from e

        logger.info(f"数据文件加载完成: {path}")
        return record


# 便捷函数
def load_cv_data(path: str | Path = "data.yaml") -> CVData:
    """加载履历数据"""
    return CVDataLoader().load(path)
