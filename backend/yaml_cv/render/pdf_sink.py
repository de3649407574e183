"""
PDF输出 - 基于 ReportLab canvas 的文档Sink实现

职责：
1. 注册TTF字体（mincho/gothic）
2. 按页追加绘制（文本/折线/图片），坐标mm -> pt
3. 全部渲染成功后一次性写出PDF

依赖：
- reportlab: PDF画布与字体
- Pillow: 读取照片像素尺寸（经 reportlab ImageReader）
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..config import RuntimeConfig, get_config
from ..interfaces import IDocumentSink, IPageCanvas, ResourceError, StructuralError
from ..models import LineOptions, LineStyle, Point, Size, pt_to_mm
from .fonts import FontRegistry

logger = logging.getLogger(__name__)

DASH_PATTERN = (1, 1)  # pt


class ReportLabPage(IPageCanvas):
    """单页绘制句柄（仅当前页可写）"""

    def __init__(self, document: ReportLabDocument, page_no: int):
        self.document = document
        self.page_no = page_no

    def _canvas(self) -> canvas.Canvas:
        if self.document.page_count != self.page_no:
            raise StructuralError(f"第{self.page_no}页已结束，不能再绘制")
        return self.document.canvas

    def draw_text(self, text: str, origin: Point, font_face: str, font_size: float) -> None:
        c = self._canvas()
        c.setFont(font_face, font_size)
        c.drawString(origin.x * mm, origin.y * mm, text)

    def draw_polyline(
        self,
        points: Sequence[Point],
        closed: bool,
        line_options: LineOptions,
    ) -> None:
        c = self._canvas()
        c.setLineWidth(line_options.width)
        if line_options.style == LineStyle.DASHED:
            c.setDash(*DASH_PATTERN)
        else:
            c.setDash()

        path = c.beginPath()
        first, *rest = points
        path.moveTo(first.x * mm, first.y * mm)
        for point in rest:
            path.lineTo(point.x * mm, point.y * mm)
        if closed:
            path.close()
        c.drawPath(path, stroke=1, fill=0)

    def draw_image(
        self,
        path: Path,
        origin: Point,
        natural_size: Size,
        scale_x: float,
        scale_y: float,
    ) -> None:
        c = self._canvas()
        c.drawImage(
            str(path),
            origin.x * mm,
            origin.y * mm,
            width=natural_size.width * scale_x * mm,
            height=natural_size.height * scale_y * mm,
        )


class ReportLabDocument(IDocumentSink):
    """PDF文档（A4）"""

    def __init__(
        self,
        output_path: str | Path,
        config: RuntimeConfig | None = None,
        fonts: FontRegistry | None = None,
    ):
        self.config = config or get_config()
        self.output_path = Path(output_path)
        self.fonts = fonts or FontRegistry(self.config.fonts.get_font_paths())
        self.page_count = 0

        page = self.config.page
        self.canvas = canvas.Canvas(
            str(self.output_path),
            pagesize=(page.width_mm * mm, page.height_mm * mm),
        )
        self.canvas.setTitle(page.title)
        self._register_fonts()

    def _register_fonts(self) -> None:
        """注册全部TTF字体"""
        for name, font_path in self.fonts.items():
            if name in pdfmetrics.getRegisteredFontNames():
                continue
            if not font_path.exists():
                raise ResourceError(f"字体文件不存在: {name}: {font_path}")
            try:
                pdfmetrics.registerFont(TTFont(name, str(font_path)))
            except Exception as e:
                raise ResourceError(f"字体加载失败: {name}: {font_path}: {e}") from e
            logger.debug(f"注册字体: {name} -> {font_path}")

    def new_page(self) -> ReportLabPage:
        if self.page_count > 0:
            self.canvas.showPage()
        self.page_count += 1
        return ReportLabPage(self, self.page_count)

    def string_width(self, text: str, font_face: str, font_size: float) -> float:
        return pt_to_mm(pdfmetrics.stringWidth(text, font_face, font_size))

    def image_size(self, path: Path) -> Size:
        """像素尺寸按参考DPI换算为mm"""
        if not Path(path).exists():
            raise ResourceError(f"照片文件不存在: {path}")
        try:
            width_px, height_px = ImageReader(str(path)).getSize()
        except Exception as e:
            raise ResourceError(f"照片读取失败: {path}: {e}") from e
        dpi = self.config.photo.dpi
        return Size(width=width_px / dpi * 25.4, height=height_px / dpi * 25.4)

    def save(self) -> Path:
        if self.page_count == 0:
            self.new_page()
        try:
            self.canvas.save()
        except OSError as e:
            raise ResourceError(f"PDF写出失败: {self.output_path}: {e}") from e
        logger.info(f"PDF已写出: {self.output_path} ({self.page_count}页)")
        return self.output_path
