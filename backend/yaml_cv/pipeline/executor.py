"""
流水线执行器 - 编排各阶段执行

阶段：
1. LOAD_DATA    读取 data.yaml
2. PARSE_STYLE  解析 style.txt（全部解析完才开始渲染）
3. RENDER       按顺序执行命令
4. SAVE         写出PDF

任一阶段失败立即终止，不输出半成品。

测试要点：
- test_execute_writes_pdf: 完整执行
- test_parse_failure_no_output: 解析失败不产生输出
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from ..config import CVDataLoader, RuntimeConfig, get_config
from ..render import RenderEngine, ReportLabDocument
from ..style import StyleParser

logger = logging.getLogger(__name__)


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    LOAD_DATA = "LOAD_DATA"
    PARSE_STYLE = "PARSE_STYLE"
    RENDER = "RENDER"
    SAVE = "SAVE"


class CVExecutor:
    """流水线执行器"""

    def __init__(self, config: RuntimeConfig | None = None):
        self.config = config or get_config()
        self.loader = CVDataLoader()
        self.parser = StyleParser()

    def execute(
        self,
        data_path: str | Path,
        style_path: str | Path,
        output_path: str | Path,
    ) -> Path:
        """执行流水线，返回输出PDF路径"""
        started = time.monotonic()

        record = self._run_stage(StageEnum.LOAD_DATA, lambda: self.loader.load(data_path))
        commands = self._run_stage(StageEnum.PARSE_STYLE, lambda: self.parser.parse_file(style_path))

        document = self._run_stage(
            StageEnum.RENDER,
            lambda: self._render(record, commands, Path(output_path)),
        )
        result = self._run_stage(StageEnum.SAVE, document.save)

        logger.info(f"完成: {result} ({time.monotonic() - started:.2f}s)")
        return result

    def _render(self, record, commands, output_path: Path) -> ReportLabDocument:
        document = ReportLabDocument(output_path, self.config)
        RenderEngine(document, record, self.config, document.fonts).render(commands)
        return document

    def _run_stage(self, stage: StageEnum, handler: Callable[[], Any]) -> Any:
        """执行单个阶段"""
        logger.info(f"开始阶段: {stage.value}")
        try:
            return handler()
        except Exception as e:
            logger.error(f"阶段失败 {stage.value}: {e}")
            raise
