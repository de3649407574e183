"""
样式脚本解析器 - 逐行解析 style.txt 为命令序列

脚本格式：
    # 注释行
    string,20mm,260mm,$name,font_size=24,font_face=gothic
    line,0mm,0mm,180mm,0mm,line_style=dashed
    lines,3,0mm,0mm,10mm,0mm,0mm,10mm,close=false

规则：
1. 以#开头的行和空行跳过
2. 每行按逗号切分，首字段为命令关键字
3. 关键字后是按位置固定的必填字段
4. 从第一个 key=value 字段起为可选项区域，未识别的键忽略
5. 长度字段为浮点数，可带mm后缀

测试要点：
- test_parse_every_keyword: 每个命令最小合法行
- test_missing_field: 缺字段报错带字段名/命令/行号
- test_unknown_keyword: 未知命令报错
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

from ..interfaces import (
    IStyleParser,
    ResourceError,
    StructuralError,
    StyleSyntaxError,
    ValueParseError,
)
from ..models import (
    Box,
    Command,
    EducationExperience,
    FontOptions,
    History,
    Line,
    LineOptions,
    Lines,
    LineStyle,
    MiscBox,
    MultiLines,
    NewPage,
    Photo,
    Point,
    Size,
    Text,
    TextBox,
    YMBox,
)

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"
FIELD_SEPARATOR = ","
LENGTH_SUFFIX = "mm"

OPTION_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$")

FONT_OPTION_KEYS = frozenset({"font_size", "font_face"})
LINE_OPTION_KEYS = frozenset({"line_width", "line_style"})

_TRUE_TOKENS = {"true", "yes", "1"}
_FALSE_TOKENS = {"false", "no", "0"}


def parse_length(raw: str) -> float:
    """解析长度字段（可带mm后缀）"""
    text = raw.strip()
    if text.endswith(LENGTH_SUFFIX):
        text = text[: -len(LENGTH_SUFFIX)].strip()
    return float(text)


def is_option_field(raw: str) -> bool:
    """是否为 key=value 形式"""
    return OPTION_PATTERN.match(raw.strip()) is not None


class FieldReader:
    """单行字段读取器 - 按位置取必填字段，按键取可选项"""

    def __init__(self, keyword: str, fields: list[str], line_no: int, option_keys: frozenset[str]):
        self.keyword = keyword
        self.line_no = line_no

        split_at = len(fields)
        for i, raw in enumerate(fields):
            if is_option_field(raw):
                split_at = i
                break
        self.positional = fields[:split_at]
        self.options = self._collect_options(fields[split_at:], option_keys)

    @staticmethod
    def _collect_options(raw_options: list[str], option_keys: frozenset[str]) -> dict[str, str]:
        options: dict[str, str] = {}
        for raw in raw_options:
            match = OPTION_PATTERN.match(raw)
            if match is None:
                continue
            key, value = match.group(1), match.group(2).strip()
            if key in option_keys:
                options[key] = value
        return options

    # === 错误构造 ===

    def missing(self, name: str) -> StyleSyntaxError:
        return StyleSyntaxError("缺少必填字段", self.line_no, self.keyword, name)

    def invalid(self, name: str, raw: str, expected: str) -> ValueParseError:
        return ValueParseError(f"无法解析为{expected}: {raw!r}", self.line_no, self.keyword, name)

    def structural(self, message: str, name: str | None = None) -> StructuralError:
        return StructuralError(message, self.line_no, self.keyword, name)

    # === 必填字段 ===

    def raw(self, index: int, name: str) -> str:
        if index >= len(self.positional):
            raise self.missing(name)
        return self.positional[index]

    def text(self, index: int, name: str) -> str:
        return self.raw(index, name)

    def length(self, index: int, name: str) -> float:
        raw = self.raw(index, name)
        try:
            return parse_length(raw)
        except ValueError as e:
            raise self.invalid(name, raw, "长度") from e

    def count(self, index: int, name: str) -> int:
        raw = self.raw(index, name)
        try:
            value = int(raw)
        except ValueError as e:
            raise self.invalid(name, raw, "整数") from e
        if value < 0:
            raise self.invalid(name, raw, "非负整数")
        return value

    def point(self, x_index: int, y_index: int, x_name: str, y_name: str) -> Point:
        return Point(x=self.length(x_index, x_name), y=self.length(y_index, y_name))

    def size(self, w_index: int, h_index: int) -> Size:
        return Size(width=self.length(w_index, "width"), height=self.length(h_index, "height"))

    # === 可选项 ===

    def option_float(self, key: str) -> float | None:
        if key not in self.options:
            return None
        raw = self.options[key]
        try:
            return float(raw)
        except ValueError as e:
            raise self.invalid(key, raw, "数值") from e

    def option_bool(self, key: str) -> bool | None:
        if key not in self.options:
            return None
        raw = self.options[key].lower()
        if raw in _TRUE_TOKENS:
            return True
        if raw in _FALSE_TOKENS:
            return False
        raise self.invalid(key, self.options[key], "布尔值")

    def font_options(self) -> FontOptions:
        font_face = self.options.get("font_face")
        if font_face == "":
            raise self.invalid("font_face", font_face, "字体名")
        return FontOptions(font_size=self.option_float("font_size"), font_face=font_face)

    def line_options(self) -> LineOptions:
        line_style = None
        if "line_style" in self.options:
            raw = self.options["line_style"]
            try:
                line_style = LineStyle(raw.lower())
            except ValueError as e:
                raise self.invalid("line_style", raw, "线型(solid/dashed)") from e
        return LineOptions(line_width=self.option_float("line_width"), line_style=line_style)


# ============================================================================
# 各命令解析函数
# ============================================================================

def _parse_string(r: FieldReader) -> Text:
    return Text(
        position=r.point(0, 1, "x", "y"),
        value=r.text(2, "value"),
        font_options=r.font_options(),
    )


def _parse_line(r: FieldReader) -> Line:
    return Line(
        start_position=r.point(0, 1, "x1", "y1"),
        end_position=r.point(2, 3, "x2", "y2"),
        line_options=r.line_options(),
    )


def _parse_box(r: FieldReader) -> Box:
    return Box(
        position=r.point(0, 1, "x", "y"),
        size=r.size(2, 3),
        line_options=r.line_options(),
    )


def _parse_photo(r: FieldReader) -> Photo:
    return Photo(position=r.point(0, 1, "x", "y"), size=r.size(2, 3))


def _parse_new_page(r: FieldReader) -> NewPage:
    return NewPage()


def _parse_textbox(r: FieldReader) -> TextBox:
    return TextBox(
        position=r.point(0, 1, "x", "y"),
        size=r.size(2, 3),
        value=r.text(4, "value"),
        font_options=r.font_options(),
    )


def _parse_multi_lines(r: FieldReader) -> MultiLines:
    return MultiLines(
        start_position=r.point(0, 1, "x", "y"),
        direction=r.point(2, 3, "dx", "dy"),
        stroke_number=r.count(4, "stroke_number"),
        position_offset=r.point(5, 6, "sx", "sy"),
    )


def _parse_ymbox(r: FieldReader) -> YMBox:
    return YMBox(
        title=r.text(0, "title"),
        height=r.length(1, "height"),
        num=r.count(2, "num"),
        value=r.text(3, "value"),
    )


def _parse_miscbox(r: FieldReader) -> MiscBox:
    return MiscBox(
        title=r.text(0, "title"),
        y=r.length(1, "y"),
        height=r.length(2, "height"),
        value=r.text(3, "value"),
    )


def _parse_history(r: FieldReader) -> History:
    return History(
        y=r.length(0, "y"),
        year_x=r.length(1, "year_x"),
        month_x=r.length(2, "month_x"),
        value_x=r.length(3, "value_x"),
        padding=r.length(4, "padding"),
        value=r.text(5, "value"),
        font_options=r.font_options(),
    )


def _parse_education_experience(r: FieldReader) -> EducationExperience:
    return EducationExperience(
        y=r.length(0, "y"),
        year_x=r.length(1, "year_x"),
        month_x=r.length(2, "month_x"),
        value_x=r.length(3, "value_x"),
        padding=r.length(4, "padding"),
        caption_x=r.length(5, "caption_x"),
        ijo_x=r.length(6, "ijo_x"),
        font_options=r.font_options(),
    )


def _parse_lines(r: FieldReader) -> Lines:
    stroke_number = r.count(0, "stroke_number")

    # 行尾多余的逗号不算坐标
    deltas = r.positional[1:]
    while deltas and not deltas[-1]:
        deltas = deltas[:-1]
    if len(deltas) % 2 != 0:
        raise r.missing(f"y{len(deltas) // 2}")

    positions = tuple(
        r.point(1 + 2 * i, 2 + 2 * i, f"x{i}", f"y{i}") for i in range(len(deltas) // 2)
    )
    if not positions:
        raise r.structural("至少需要一个点", "positions")
    if len(positions) != stroke_number:
        raise r.structural(
            f"点数({len(positions)})与stroke_number({stroke_number})不一致", "stroke_number"
        )

    return Lines(
        stroke_number=stroke_number,
        positions=positions,
        line_options=r.line_options(),
        close=r.option_bool("close"),
    )


# 关键字 -> (解析函数, 可识别的可选项)
COMMAND_PARSERS: dict[str, tuple[Callable[[FieldReader], Command], frozenset[str]]] = {
    "string": (_parse_string, FONT_OPTION_KEYS),
    "line": (_parse_line, LINE_OPTION_KEYS),
    "box": (_parse_box, LINE_OPTION_KEYS),
    "photo": (_parse_photo, frozenset()),
    "new_page": (_parse_new_page, frozenset()),
    "textbox": (_parse_textbox, FONT_OPTION_KEYS),
    "multi_lines": (_parse_multi_lines, frozenset()),
    "ymbox": (_parse_ymbox, frozenset()),
    "miscbox": (_parse_miscbox, frozenset()),
    "history": (_parse_history, FONT_OPTION_KEYS),
    "education_experience": (_parse_education_experience, FONT_OPTION_KEYS),
    "lines": (_parse_lines, LINE_OPTION_KEYS | {"close"}),
}


class StyleParser(IStyleParser):
    """样式脚本解析器实现"""

    def parse(self, text: str) -> list[Command]:
        """解析脚本全文（行号从1开始）"""
        commands: list[Command] = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            command = self.parse_line(line, line_no)
            if command is not None:
                commands.append(command)

        logger.info(f"样式脚本解析完成: {len(commands)} 条命令")
        return commands

    def parse_line(self, line: str, line_no: int) -> Command | None:
        """解析单行，注释/空行返回None"""
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            return None

        fields = [field.strip() for field in stripped.split(FIELD_SEPARATOR)]
        keyword, args = fields[0], fields[1:]

        if keyword not in COMMAND_PARSERS:
            raise StyleSyntaxError(f"未知命令: {keyword}", line_no, keyword)

        parse_func, option_keys = COMMAND_PARSERS[keyword]
        command = parse_func(FieldReader(keyword, args, line_no, option_keys))
        command = command.model_copy(update={"line_no": line_no})
        logger.debug(f"第{line_no}行: {command!r}")
        return command

    def parse_file(self, path: str | Path) -> list[Command]:
        """读取并解析脚本文件"""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except OSError as e:
            raise ResourceError(f"样式脚本无法读取: {path}: {e}") from e

        logger.info(f"读取样式脚本: {path}")
        return self.parse(text)
