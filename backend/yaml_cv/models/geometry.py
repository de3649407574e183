"""
几何基元 - 点/尺寸/长度换算

坐标单位统一为mm，页面原点在左下角（与PDF后端一致）
"""

from __future__ import annotations

from pydantic import BaseModel

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


def pt_to_mm(value: float) -> float:
    """磅(pt)转mm"""
    return value * MM_PER_INCH / POINTS_PER_INCH


def mm_to_pt(value: float) -> float:
    """mm转磅(pt)"""
    return value * POINTS_PER_INCH / MM_PER_INCH


class Point(BaseModel):
    """二维点（既可作绝对位置，也可作相对位移）"""
    x: float = 0.0
    y: float = 0.0

    model_config = {"frozen": True}

    def __add__(self, other: Point) -> Point:
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(x=self.x - other.x, y=self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Size(BaseModel):
    """二维尺寸"""
    width: float
    height: float

    model_config = {"frozen": True}
