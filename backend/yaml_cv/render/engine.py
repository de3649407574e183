"""
渲染引擎 - 按顺序执行命令序列，输出到文档Sink

职责：
1. 维护当前页句柄（new_page 时替换，不回退）
2. 统一在绘制边界处加页边距（只作用于绝对坐标，不作用于位移）
3. 解析文本变量/履历表变量
4. 展开多线、折线、履历表等复合命令

测试要点：
- test_multi_lines_stepping: 平行线起点按偏移递进
- test_lines_cumulative: 折线顶点为位移累加
- test_history_rows: 履历表行距
- test_new_page_isolation: 换页后的绘制不落到旧页
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from ..config import RuntimeConfig, get_config
from ..interfaces import IRenderer, StructuralError, YamlCVError
from ..models import (
    Box,
    Command,
    EducationExperience,
    Entry,
    FontOptions,
    History,
    Line,
    LineOptions,
    Lines,
    MiscBox,
    MultiLines,
    NewPage,
    Photo,
    Point,
    Size,
    TableColumns,
    Text,
    TextBox,
    YMBox,
)
from ..style.variables import resolve_list, resolve_scalar
from .fonts import FontRegistry, font_size_to_mm

if TYPE_CHECKING:
    from ..interfaces import IDocumentSink, IPageCanvas
    from ..models import CVData

logger = logging.getLogger(__name__)

EDUCATION_CAPTION = "学歴"
EXPERIENCE_CAPTION = "職歴"
END_MARKER = "以上"


def photo_scale(target: Size, natural: Size) -> tuple[float, float]:
    """照片缩放系数 = 目标尺寸 / 自然尺寸"""
    if natural.width <= 0 or natural.height <= 0:
        raise StructuralError(f"图片自然尺寸无效: {natural.width}x{natural.height}mm")
    return target.width / natural.width, target.height / natural.height


def build_polyline(positions: Sequence[Point], origin_offset: Point) -> list[Point]:
    """首点为绝对坐标（加偏移），后续顶点为前一顶点+位移"""
    if not positions:
        raise StructuralError("折线至少需要一个点", field="positions")
    vertices = [positions[0] + origin_offset]
    for delta in positions[1:]:
        vertices.append(vertices[-1] + delta)
    return vertices


class RenderEngine(IRenderer):
    """渲染引擎实现"""

    def __init__(
        self,
        sink: IDocumentSink,
        record: CVData,
        config: RuntimeConfig | None = None,
        fonts: FontRegistry | None = None,
    ):
        self.config = config or get_config()
        self.sink = sink
        self.record = record
        self.fonts = fonts or FontRegistry(self.config.fonts.get_font_paths())
        self.margin = Point(x=self.config.page.margin_mm, y=self.config.page.margin_mm)
        self.photo_path = self.config.photo.path
        self.page: IPageCanvas | None = None

        self._handlers: dict[str, Callable] = {
            "string": self._draw_text,
            "line": self._draw_line,
            "box": self._draw_box,
            "photo": self._draw_photo,
            "new_page": self._new_page,
            "textbox": self._draw_textbox,
            "multi_lines": self._draw_multi_lines,
            "lines": self._draw_lines,
            "ymbox": self._draw_ymbox,
            "miscbox": self._draw_miscbox,
            "history": self._draw_history,
            "education_experience": self._draw_education_experience,
        }

    def render(self, commands: Sequence[Command]) -> None:
        """按文件顺序执行全部命令"""
        self.page = self.sink.new_page()
        for command in commands:
            logger.debug(f"渲染命令: 第{command.line_no}行 {command.kind}")
            try:
                self._handlers[command.kind](command)
            except YamlCVError as e:
                raise e.locate(command.line_no, command.kind)
        logger.info(f"渲染完成: {len(commands)} 条命令")

    def to_page(self, point: Point) -> Point:
        """绝对坐标 -> 页面坐标（加页边距）"""
        return point + self.margin

    # ------------------------------------------------------------------
    # 文本
    # ------------------------------------------------------------------

    def _draw_text(self, text: Text) -> None:
        value = resolve_scalar(text.value, self.record)
        self._place_text(text.position, value, text.font_options)

    def _place_text(self, position: Point, value: str, font_options: FontOptions) -> None:
        """左对齐绘制（多行时逐行下移一个字高）"""
        face = self.fonts.resolve(font_options.face)
        line_height = font_size_to_mm(font_options)
        origin = self.to_page(position)
        for i, line in enumerate(value.split("\n")):
            baseline = Point(x=origin.x, y=origin.y - line_height * (i + 1))
            self.page.draw_text(line, baseline, face, font_options.size)

    def _draw_textbox(self, textbox: TextBox) -> None:
        value = resolve_scalar(textbox.value, self.record)
        face = self.fonts.resolve(textbox.font_options.face)

        # position 为左上角
        top_left = self.to_page(textbox.position)
        width, height = textbox.size.width, textbox.size.height
        corners = [
            Point(x=top_left.x, y=top_left.y - height),
            Point(x=top_left.x + width, y=top_left.y - height),
            Point(x=top_left.x + width, y=top_left.y),
            top_left,
        ]
        self.page.draw_polyline(corners, True, LineOptions())

        center = Point(x=top_left.x + width / 2, y=top_left.y - height / 2)
        line_height = font_size_to_mm(textbox.font_options)
        lines = value.split("\n")
        block_top = center.y + line_height * len(lines) / 2
        for i, line in enumerate(lines):
            line_width = self.sink.string_width(line, face, textbox.font_options.size)
            baseline = Point(x=center.x - line_width / 2, y=block_top - line_height * (i + 1))
            self.page.draw_text(line, baseline, face, textbox.font_options.size)

    # ------------------------------------------------------------------
    # 线条
    # ------------------------------------------------------------------

    def _draw_line(self, line: Line) -> None:
        start = self.to_page(line.start_position)
        self.page.draw_polyline([start, start + line.end_position], False, line.line_options)

    def _draw_box(self, box: Box) -> None:
        x, y = box.position.x, box.position.y
        w, h = box.size.width, box.size.height
        corners = [
            self.to_page(Point(x=x + w, y=y)),
            self.to_page(Point(x=x + w, y=y + h)),
            self.to_page(Point(x=x, y=y + h)),
            self.to_page(Point(x=x, y=y)),
        ]
        self.page.draw_polyline(corners, True, box.line_options)

    def _draw_multi_lines(self, multi_lines: MultiLines) -> None:
        position = multi_lines.start_position
        for _ in range(multi_lines.stroke_number):
            self._draw_line(Line(start_position=position, end_position=multi_lines.direction))
            position = position + multi_lines.position_offset

    def _draw_lines(self, lines: Lines) -> None:
        vertices = build_polyline(lines.positions, self.margin)
        self.page.draw_polyline(vertices, lines.is_closed, lines.line_options)

    # ------------------------------------------------------------------
    # 照片 / 换页
    # ------------------------------------------------------------------

    def _draw_photo(self, photo: Photo) -> None:
        natural = self.sink.image_size(self.photo_path)
        scale_x, scale_y = photo_scale(photo.size, natural)
        self.page.draw_image(self.photo_path, self.to_page(photo.position), natural, scale_x, scale_y)

    def _new_page(self, command: NewPage) -> None:
        self.page = self.sink.new_page()
        logger.debug("换页")

    # ------------------------------------------------------------------
    # 履历表
    # ------------------------------------------------------------------

    def _draw_table(
        self,
        header: Text | None,
        entries: Sequence[Entry],
        columns: TableColumns,
        font_options: FontOptions,
    ) -> float:
        """绘制年/月/内容三列表格，返回下一行的y"""
        current_y = columns.y + columns.padding
        if header is not None:
            self._place_text(header.position, header.value, header.font_options)
            current_y = header.position.y - columns.padding

        # 两位数月份左移，使个位对齐
        two_digit_shift = font_size_to_mm(font_options) / 3.0
        for entry in entries:
            self._place_text(Point(x=columns.year_x, y=current_y), entry.year or "", font_options)

            month = str(entry.month) if entry.month is not None else ""
            month_x = columns.month_x - (two_digit_shift if len(month) > 1 else 0.0)
            self._place_text(Point(x=month_x, y=current_y), month, font_options)

            self._place_text(Point(x=columns.value_x, y=current_y), entry.value, font_options)
            current_y -= columns.padding
        return current_y

    def _draw_history(self, history: History) -> None:
        entries = resolve_list(history.value, self.record)
        self._draw_table(None, entries, history, history.font_options)

    def _draw_education_experience(self, command: EducationExperience) -> None:
        education_header = Text(
            position=Point(x=command.caption_x, y=command.y),
            value=EDUCATION_CAPTION,
            font_options=command.font_options,
        )
        current_y = self._draw_table(
            education_header, self.record.education, command, command.font_options
        )

        experience_header = Text(
            position=Point(x=command.caption_x, y=current_y),
            value=EXPERIENCE_CAPTION,
            font_options=command.font_options,
        )
        current_y = self._draw_table(
            experience_header, self.record.experience, command, command.font_options
        )

        self._place_text(Point(x=command.ijo_x, y=current_y), END_MARKER, command.font_options)

    # ------------------------------------------------------------------
    # 未定义布局的命令
    # ------------------------------------------------------------------

    def _draw_ymbox(self, ymbox: YMBox) -> None:
        # 布局未定义，只记录
        logger.warning(f"ymbox 暂不绘制: {ymbox.title}")

    def _draw_miscbox(self, miscbox: MiscBox) -> None:
        logger.warning(f"miscbox 暂不绘制: {miscbox.title}")
