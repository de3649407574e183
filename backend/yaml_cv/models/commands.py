"""
绘制命令模型 - 样式脚本中每一行对应一个命令

命令集合是封闭的（按 kind 区分的联合类型），渲染引擎按 kind 分派。
注意以下字段是相对位移而非绝对坐标：
- Line.end_position
- MultiLines.direction / MultiLines.position_offset
- Lines.positions[1:]
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .geometry import Point, Size
from .options import FontOptions, LineOptions


class _Command(BaseModel):
    """命令基类（不可变）"""
    model_config = {"frozen": True}

    line_no: int | None = Field(None, description="脚本中的行号（用于报错定位）")


class Text(_Command):
    """文本（支持换行）"""
    kind: Literal["string"] = "string"
    position: Point
    value: str
    font_options: FontOptions = Field(default_factory=FontOptions)


class Line(_Command):
    """直线：start_position -> start_position + end_position"""
    kind: Literal["line"] = "line"
    start_position: Point
    end_position: Point = Field(..., description="相对位移")
    line_options: LineOptions = Field(default_factory=LineOptions)


class Box(_Command):
    """矩形边框（不填充）"""
    kind: Literal["box"] = "box"
    position: Point
    size: Size
    line_options: LineOptions = Field(default_factory=LineOptions)


class Photo(_Command):
    """照片位置与尺寸"""
    kind: Literal["photo"] = "photo"
    position: Point
    size: Size


class NewPage(_Command):
    """换页"""
    kind: Literal["new_page"] = "new_page"


class TextBox(_Command):
    """带边框的居中文本（position为左上角）"""
    kind: Literal["textbox"] = "textbox"
    position: Point
    size: Size
    value: str
    font_options: FontOptions = Field(default_factory=FontOptions)


class MultiLines(_Command):
    """等距平行线组"""
    kind: Literal["multi_lines"] = "multi_lines"
    start_position: Point
    direction: Point = Field(..., description="每条线的相对位移")
    stroke_number: int = Field(..., ge=0)
    position_offset: Point = Field(..., description="每条线之间的起点偏移")


class Lines(_Command):
    """折线/多边形：首点绝对，其余为累加位移"""
    kind: Literal["lines"] = "lines"
    stroke_number: int = Field(..., ge=0)
    positions: tuple[Point, ...] = Field(..., min_length=1)
    line_options: LineOptions = Field(default_factory=LineOptions)
    close: bool | None = None

    @property
    def is_closed(self) -> bool:
        return True if self.close is None else self.close


class YMBox(_Command):
    """年月表格框（仅解析，渲染未定义）"""
    kind: Literal["ymbox"] = "ymbox"
    title: str
    height: float
    num: int = Field(..., ge=0)
    value: str


class MiscBox(_Command):
    """带标题的文本框（仅解析，渲染未定义）"""
    kind: Literal["miscbox"] = "miscbox"
    title: str
    y: float
    height: float
    value: str


class TableColumns(_Command):
    """履历表的列位置与行距"""
    y: float
    year_x: float
    month_x: float
    value_x: float
    padding: float


class History(TableColumns):
    """无标题履历表（绑定列表变量）"""
    kind: Literal["history"] = "history"
    value: str
    font_options: FontOptions = Field(default_factory=FontOptions)


class EducationExperience(TableColumns):
    """学历+职历双表"""
    kind: Literal["education_experience"] = "education_experience"
    caption_x: float
    ijo_x: float
    font_options: FontOptions = Field(default_factory=FontOptions)


Command = Annotated[
    Union[
        Text,
        Line,
        Box,
        Photo,
        NewPage,
        TextBox,
        MultiLines,
        Lines,
        YMBox,
        MiscBox,
        History,
        EducationExperience,
    ],
    Field(discriminator="kind"),
]
