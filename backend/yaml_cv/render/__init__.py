"""
渲染模块 - 命令序列 -> PDF

子模块：
- fonts: 字体注册表
- engine: 渲染引擎（布局计算）
- pdf_sink: ReportLab 输出后端
"""

from .engine import RenderEngine, build_polyline, photo_scale
from .fonts import FontRegistry, font_size_to_mm
from .pdf_sink import ReportLabDocument, ReportLabPage

__all__ = [
    "RenderEngine",
    "build_polyline",
    "photo_scale",
    "FontRegistry",
    "font_size_to_mm",
    "ReportLabDocument",
    "ReportLabPage",
]
