"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 渲染引擎只依赖 IDocumentSink/IPageCanvas，不关心PDF后端
3. 便于单元测试和mock替换（测试中使用内存记录Sink）

使用方式：
    from yaml_cv.interfaces import IDocumentSink

    class MySink(IDocumentSink):
        def new_page(self) -> IPageCanvas:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import CVData, Command, LineOptions, Point, Size


# ============================================================================
# 输入模块接口
# ============================================================================

class IStyleParser(ABC):
    """样式脚本解析器接口"""

    @abstractmethod
    def parse(self, text: str) -> list[Command]:
        """
        解析样式脚本文本

        Args:
            text: 脚本全文

        Returns:
            按文件顺序排列的命令序列

        Raises:
            StyleError: 语法/取值/结构错误（带行号）
        """
        ...

    @abstractmethod
    def parse_file(self, path: Path) -> list[Command]:
        """读取并解析样式脚本文件"""
        ...


class IDataLoader(ABC):
    """履历数据加载器接口"""

    @abstractmethod
    def load(self, path: Path) -> CVData:
        """
        加载数据文件

        Raises:
            ResourceError: 文件不存在或不可读
            DataLoadError: 缺少必填字段/字段类型错误
        """
        ...


# ============================================================================
# 文档输出接口（渲染后端）
# ============================================================================

class IPageCanvas(ABC):
    """单页绘制接口 - 所有坐标单位为mm，原点左下角"""

    @abstractmethod
    def draw_text(self, text: str, origin: Point, font_face: str, font_size: float) -> None:
        """在基线左端 origin 处绘制一行文本"""
        ...

    @abstractmethod
    def draw_polyline(
        self,
        points: Sequence[Point],
        closed: bool,
        line_options: LineOptions,
    ) -> None:
        """绘制折线/多边形（不填充）"""
        ...

    @abstractmethod
    def draw_image(
        self,
        path: Path,
        origin: Point,
        natural_size: Size,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """以左下角 origin 放置图片，按 scale 缩放自然尺寸"""
        ...


class IDocumentSink(ABC):
    """文档输出接口"""

    @abstractmethod
    def new_page(self) -> IPageCanvas:
        """开启新页并返回其绘制句柄（之前的页不再可写）"""
        ...

    @abstractmethod
    def string_width(self, text: str, font_face: str, font_size: float) -> float:
        """计算文本宽度（mm）"""
        ...

    @abstractmethod
    def image_size(self, path: Path) -> Size:
        """图片自然尺寸（mm）"""
        ...

    @abstractmethod
    def save(self) -> Path:
        """
        写出最终文档

        Returns:
            输出文件路径

        Raises:
            ResourceError: 输出路径不可写
        """
        ...


class IRenderer(ABC):
    """渲染引擎接口"""

    @abstractmethod
    def render(self, commands: Sequence[Command]) -> None:
        """按顺序执行全部命令"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class YamlCVError(Exception):
    """基础异常（可携带脚本定位信息：行号/命令/字段）"""

    def __init__(
        self,
        message: str,
        line_no: int | None = None,
        keyword: str | None = None,
        field: str | None = None,
    ):
        self.message = message
        self.line_no = line_no
        self.keyword = keyword
        self.field = field
        super().__init__(message)

    def locate(self, line_no: int | None, keyword: str | None) -> YamlCVError:
        """补充脚本定位（已有的不覆盖），返回自身以便直接 raise"""
        if self.line_no is None:
            self.line_no = line_no
        if self.keyword is None:
            self.keyword = keyword
        return self

    def __str__(self) -> str:
        location = []
        if self.line_no is not None:
            location.append(f"第{self.line_no}行")
        if self.keyword:
            location.append(f"命令 {self.keyword}")
        if self.field:
            location.append(f"字段 {self.field}")
        if not location:
            return self.message
        return f"{', '.join(location)}: {self.message}"


class StyleError(YamlCVError):
    """样式脚本错误（解析阶段，必带行号）"""
    pass


class StyleSyntaxError(StyleError):
    """语法错误（未知命令/缺少字段）"""
    pass


class ValueParseError(StyleError):
    """取值错误（数值/枚举转换失败）"""
    pass


class StructuralError(StyleError):
    """结构错误（几何数据不完整或不一致）"""
    pass


class VariableResolutionError(YamlCVError):
    """变量解析错误"""
    pass


class FontResolutionError(YamlCVError):
    """字体未注册"""
    pass


class ResourceError(YamlCVError):
    """资源错误（文件缺失/不可读/不可写）"""
    pass


class DataLoadError(ResourceError):
    """数据文件内容错误"""
    pass
