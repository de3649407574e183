"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Point/Size: 几何基元（mm）
- FontOptions/LineOptions: 绘制选项
- Command: 样式脚本命令（封闭联合类型）
- CVData/Entry: 输入的履历数据
"""

from .commands import (
    Box,
    Command,
    EducationExperience,
    History,
    Line,
    Lines,
    MiscBox,
    MultiLines,
    NewPage,
    Photo,
    TableColumns,
    Text,
    TextBox,
    YMBox,
)
from .cv_data import CVData, Entry
from .geometry import Point, Size, mm_to_pt, pt_to_mm
from .options import (
    DEFAULT_FONT_FACE,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_WIDTH,
    FontOptions,
    LineOptions,
    LineStyle,
)

__all__ = [
    "Point",
    "Size",
    "pt_to_mm",
    "mm_to_pt",
    "FontOptions",
    "LineOptions",
    "LineStyle",
    "DEFAULT_FONT_FACE",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_LINE_WIDTH",
    "Command",
    "Text",
    "Line",
    "Box",
    "Photo",
    "NewPage",
    "TextBox",
    "MultiLines",
    "Lines",
    "YMBox",
    "MiscBox",
    "TableColumns",
    "History",
    "EducationExperience",
    "CVData",
    "Entry",
]
