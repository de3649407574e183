"""
PDF输出单元测试（ReportLab）

不依赖真实TTF字体：使用空字体注册表 + 内置 Helvetica
"""

from pathlib import Path

import pytest
from PIL import Image

from yaml_cv.config import FontConfig, PhotoConfig, RuntimeConfig
from yaml_cv.interfaces import ResourceError, StructuralError
from yaml_cv.models import LineOptions, LineStyle, Point, Size
from yaml_cv.render import FontRegistry, ReportLabDocument


@pytest.fixture
def no_font_config() -> RuntimeConfig:
    return RuntimeConfig(fonts=FontConfig(faces={}))


@pytest.fixture
def document(temp_dir: Path, no_font_config: RuntimeConfig) -> ReportLabDocument:
    return ReportLabDocument(temp_dir / "out.pdf", no_font_config)


@pytest.fixture
def photo_file(temp_dir: Path) -> Path:
    """75x150像素的JPEG（75dpi下为 25.4x50.8mm）"""
    path = temp_dir / "photo.jpg"
    Image.new("RGB", (75, 150), color=(200, 200, 200)).save(path, "JPEG")
    return path


class TestPages:
    """页面管理"""

    def test_page_numbering(self, document: ReportLabDocument):
        first = document.new_page()
        second = document.new_page()
        assert (first.page_no, second.page_no) == (1, 2)
        assert document.page_count == 2

    def test_stale_page_rejected(self, document: ReportLabDocument):
        """换页后旧页句柄不可再写"""
        first = document.new_page()
        document.new_page()
        with pytest.raises(StructuralError):
            first.draw_polyline([Point(x=0, y=0), Point(x=10, y=0)], False, LineOptions())


class TestDrawing:
    """绘制与写出"""

    def test_save_writes_pdf(self, document: ReportLabDocument):
        page = document.new_page()
        page.draw_polyline(
            [Point(x=10, y=10), Point(x=50, y=10), Point(x=50, y=50)],
            True,
            LineOptions(line_width=1.0, line_style=LineStyle.DASHED),
        )
        page.draw_polyline([Point(x=0, y=0), Point(x=5, y=5)], False, LineOptions())
        page.draw_text("CV", Point(x=20, y=200), "Helvetica", 12.0)

        output = document.save()
        assert output == document.output_path
        assert output.read_bytes().startswith(b"%PDF")

    def test_save_without_pages(self, document: ReportLabDocument):
        """没有任何命令时也输出一页"""
        output = document.save()
        assert document.page_count == 1
        assert output.exists()

    def test_draw_image(self, document: ReportLabDocument, photo_file: Path):
        page = document.new_page()
        natural = document.image_size(photo_file)
        page.draw_image(photo_file, Point(x=150, y=200), natural, 0.5, 0.5)
        assert document.save().stat().st_size > 0

    def test_string_width(self, document: ReportLabDocument):
        """宽度以mm返回，随字号线性变化"""
        w10 = document.string_width("Hello", "Helvetica", 10.0)
        w20 = document.string_width("Hello", "Helvetica", 20.0)
        assert w10 > 0
        assert w20 == pytest.approx(2 * w10)


class TestResources:
    """外部资源"""

    def test_image_size_at_reference_dpi(self, document: ReportLabDocument, photo_file: Path):
        assert document.image_size(photo_file) == Size(width=25.4, height=50.8)

    def test_image_size_follows_dpi(self, temp_dir: Path, photo_file: Path):
        config = RuntimeConfig(fonts=FontConfig(faces={}), photo=PhotoConfig(dpi=150.0))
        document = ReportLabDocument(temp_dir / "out.pdf", config)
        size = document.image_size(photo_file)
        assert size.width == pytest.approx(12.7)
        assert size.height == pytest.approx(25.4)

    def test_missing_image(self, document: ReportLabDocument, temp_dir: Path):
        with pytest.raises(ResourceError):
            document.image_size(temp_dir / "missing.jpg")

    def test_unreadable_image(self, document: ReportLabDocument, temp_dir: Path):
        path = temp_dir / "broken.jpg"
        path.write_bytes(b"not an image")
        with pytest.raises(ResourceError):
            document.image_size(path)

    def test_missing_font_file(self, temp_dir: Path, no_font_config: RuntimeConfig):
        fonts = FontRegistry({"yamlcv_test_missing": temp_dir / "missing.ttf"})
        with pytest.raises(ResourceError) as exc_info:
            ReportLabDocument(temp_dir / "out.pdf", no_font_config, fonts)
        assert "yamlcv_test_missing" in str(exc_info.value)
