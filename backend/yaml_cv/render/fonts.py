"""
字体注册表 - 字体名到TTF文件的固定映射
"""

from __future__ import annotations

from pathlib import Path

from ..interfaces import FontResolutionError
from ..models import FontOptions, pt_to_mm


class FontRegistry:
    """已注册字体（名称 -> 文件路径）"""

    def __init__(self, fonts: dict[str, Path]):
        self._fonts = dict(fonts)

    def items(self) -> list[tuple[str, Path]]:
        return list(self._fonts.items())

    def resolve(self, name: str) -> str:
        """校验字体名并返回（未注册则报错）"""
        if name not in self._fonts:
            raise FontResolutionError(
                f"字体未注册: {name}（可用: {', '.join(self._fonts) or '无'}）"
            )
        return name


def font_size_to_mm(font_options: FontOptions) -> float:
    """字号(pt)换算为mm，作为行高"""
    return pt_to_mm(font_options.size)
