"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(engine, recording_sink):
        engine.render([...])
        assert recording_sink.pages[0].texts
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generator, Sequence

import pytest

from yaml_cv.config import PageConfig, PhotoConfig, RuntimeConfig
from yaml_cv.interfaces import IDocumentSink, IPageCanvas
from yaml_cv.models import CVData, LineOptions, Point, Size, pt_to_mm
from yaml_cv.render import FontRegistry, RenderEngine
from yaml_cv.style import StyleParser

SAMPLES_DIR = Path(__file__).resolve().parents[2] / "samples"


# ============================================================================
# 内存记录 Sink（替代PDF后端）
# ============================================================================

@dataclass
class TextRun:
    text: str
    x: float
    y: float
    font_face: str
    font_size: float


@dataclass
class Stroke:
    points: list[tuple[float, float]]
    closed: bool
    line_options: LineOptions


@dataclass
class PlacedImage:
    path: Path
    x: float
    y: float
    natural_size: Size
    scale_x: float
    scale_y: float


class RecordingPage(IPageCanvas):
    """记录单页绘制调用"""

    def __init__(self, page_no: int):
        self.page_no = page_no
        self.texts: list[TextRun] = []
        self.strokes: list[Stroke] = []
        self.images: list[PlacedImage] = []

    def draw_text(self, text: str, origin: Point, font_face: str, font_size: float) -> None:
        self.texts.append(TextRun(text, origin.x, origin.y, font_face, font_size))

    def draw_polyline(
        self,
        points: Sequence[Point],
        closed: bool,
        line_options: LineOptions,
    ) -> None:
        self.strokes.append(Stroke([p.as_tuple() for p in points], closed, line_options))

    def draw_image(
        self,
        path: Path,
        origin: Point,
        natural_size: Size,
        scale_x: float,
        scale_y: float,
    ) -> None:
        self.images.append(PlacedImage(path, origin.x, origin.y, natural_size, scale_x, scale_y))

    def text_values(self) -> list[str]:
        return [run.text for run in self.texts]


class RecordingDocument(IDocumentSink):
    """记录全部页面；文本宽度按半角估算"""

    def __init__(self, natural_image_size: Size | None = None):
        self.pages: list[RecordingPage] = []
        self.natural_image_size = natural_image_size or Size(width=40.0, height=30.0)
        self.saved = False

    def new_page(self) -> RecordingPage:
        page = RecordingPage(len(self.pages) + 1)
        self.pages.append(page)
        return page

    def string_width(self, text: str, font_face: str, font_size: float) -> float:
        return len(text) * pt_to_mm(font_size) * 0.5

    def image_size(self, path: Path) -> Size:
        return self.natural_image_size

    def save(self) -> Path:
        self.saved = True
        return Path("memory.pdf")


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def zero_margin_config() -> RuntimeConfig:
    """页边距为0的配置，便于直接核对坐标"""
    return RuntimeConfig(
        page=PageConfig(margin_mm=0.0),
        photo=PhotoConfig(path=Path("photo.jpg")),
    )


@pytest.fixture
def font_registry() -> FontRegistry:
    """不依赖真实字体文件的注册表"""
    return FontRegistry({"mincho": Path("ipaexm.ttf"), "gothic": Path("ipaexg.ttf")})


# ============================================================================
# 数据 Fixtures
# ============================================================================

def make_sample_data() -> dict[str, Any]:
    """完整的履历数据（原始字典）"""
    return {
        "date": "2024年4月1日現在",
        "name_kana": "やまだ たろう",
        "name": "山田 太郎",
        "birth_day": "1990年1月1日生",
        "gender": "男",
        "cell_phone": "090-1234-5678",
        "email": "taro@example.com",
        "photo": "photo.jpg",
        "address_kana": "とうきょうと",
        "address": "東京都千代田区",
        "address_zip": "100-0001",
        "tel": "03-1234-5678",
        "fax": "03-1234-5679",
        "address_kana2": "",
        "address2": "同上",
        "address_zip2": "",
        "tel2": "",
        "fax2": "",
        "degree": "博士(理学)",
        "degree_year": 2018,
        "degree_affiliation": "東京大学",
        "thesis_title": "数値的研究",
        "education": [
            {"year": 2009, "month": 4, "value": "東京大学 入学"},
            {"year": 2013, "month": 3, "value": "東京大学 卒業"},
            {"year": 2013, "month": 4, "value": "大学院 入学"},
        ],
        "experience": [
            {"year": 2018, "month": 4, "value": "株式会社サンプル 入社"},
            {"year": 2023, "month": 12, "value": "株式会社サンプル 退社"},
        ],
        "licences": [{"year": 2010, "month": 8, "value": "普通自動車免許"}],
        "awards": [{"value": "学生優秀発表賞"}],
        "teaching": "物理学演習",
        "affiliated_society": "日本物理学会",
        "notices": "特になし",
        "commuting_time": "45分",
        "dependents": 0,
        "spouse": "無",
        "supporting_spouse": "無",
        "hobby": "読書\n登山",
        "motivation": "貢献したい",
        "request": "貴社規定に従います",
    }


@pytest.fixture
def sample_data() -> dict[str, Any]:
    return make_sample_data()


@pytest.fixture
def sample_record(sample_data: dict[str, Any]) -> CVData:
    """示例履历数据"""
    return CVData(**sample_data)


# ============================================================================
# 渲染 Fixtures
# ============================================================================

@pytest.fixture
def parser() -> StyleParser:
    return StyleParser()


@pytest.fixture
def recording_sink() -> RecordingDocument:
    return RecordingDocument()


@pytest.fixture
def engine(
    recording_sink: RecordingDocument,
    sample_record: CVData,
    zero_margin_config: RuntimeConfig,
    font_registry: FontRegistry,
) -> RenderEngine:
    """页边距为0、输出到内存的渲染引擎"""
    return RenderEngine(recording_sink, sample_record, zero_margin_config, font_registry)


@pytest.fixture
def render(engine: RenderEngine, parser: StyleParser):
    """解析脚本并渲染，返回记录Sink"""
    def _render(script: str) -> RecordingDocument:
        engine.render(parser.parse(script))
        return engine.sink
    return _render


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def samples_dir() -> Path:
    return SAMPLES_DIR
