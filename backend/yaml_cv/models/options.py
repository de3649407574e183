"""
绘制选项 - 字体/线条的可选参数

未指定的选项保持None，在使用处统一取默认值
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

DEFAULT_FONT_SIZE = 12.0      # pt
DEFAULT_FONT_FACE = "mincho"
DEFAULT_LINE_WIDTH = 0.5      # pt


class LineStyle(str, Enum):
    """线型"""
    SOLID = "solid"
    DASHED = "dashed"


class FontOptions(BaseModel):
    """字体选项"""
    font_size: float | None = None
    font_face: str | None = None

    model_config = {"frozen": True}

    @property
    def size(self) -> float:
        return self.font_size if self.font_size is not None else DEFAULT_FONT_SIZE

    @property
    def face(self) -> str:
        return self.font_face if self.font_face is not None else DEFAULT_FONT_FACE


class LineOptions(BaseModel):
    """线条选项"""
    line_width: float | None = None
    line_style: LineStyle | None = None

    model_config = {"frozen": True}

    @property
    def width(self) -> float:
        return self.line_width if self.line_width is not None else DEFAULT_LINE_WIDTH

    @property
    def style(self) -> LineStyle:
        return self.line_style if self.line_style is not None else LineStyle.SOLID
