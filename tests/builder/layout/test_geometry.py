"""
Tests for builder.layout.geometry

Test Coverage:
- measure_section_title(): Lines x leading + text spacing
- measure_text_block(): Wrap width, padding per border mode
- measure_image_block(): Aspect fit, max height, placeholder height
- measure_pair(): Combined height and element order
"""
import pytest
from PIL import Image

from portfolio_toolkit.builder.images import BitmapCache, ImageResolver, ResolvedImage
from portfolio_toolkit.builder.layout import (
    LayoutConfig,
    measure_header,
    measure_image_block,
    measure_pair,
    measure_section_title,
    measure_text_block,
    wrap_text,
)
from portfolio_toolkit.builder.styles import ThemeName, get_scheme
from portfolio_toolkit.core.models import ContentPair, ImageItem, ImageReference, TextItem

WIDTH = 468.0
LONG_TEXT = " ".join(["portfolio"] * 120)


@pytest.fixture
def config():
    return LayoutConfig()


class TestWrapText:
    """Tests for wrap_text()."""

    def test_short_text_is_one_line(self):
        font = get_scheme("modern").body_font
        assert wrap_text("Hello", font, WIDTH) == ["Hello"]

    def test_explicit_newlines_and_blank_lines_are_kept(self):
        font = get_scheme("modern").body_font
        assert wrap_text("a\n\nb", font, WIDTH) == ["a", "", "b"]

    def test_long_text_wraps(self):
        font = get_scheme("modern").body_font
        assert len(wrap_text(LONG_TEXT, font, WIDTH)) > 3


class TestMeasureBlocks:
    """Tests for block measurement formulas."""

    @pytest.mark.parametrize("theme", list(ThemeName))
    def test_section_title_height(self, theme):
        scheme = get_scheme(theme)

        layout = measure_section_title("Math", WIDTH, scheme)

        assert layout.height == pytest.approx(scheme.section_font.leading + scheme.text_spacing)

    @pytest.mark.parametrize("theme", list(ThemeName))
    def test_text_block_height(self, theme):
        # Arrange
        scheme = get_scheme(theme)
        pad_h = scheme.border.horizontal_padding

        # Act
        layout = measure_text_block(LONG_TEXT, WIDTH, scheme)

        # Assert
        expected_lines = wrap_text(LONG_TEXT, scheme.body_font, WIDTH - 2 * pad_h)
        assert layout.lines == tuple(expected_lines)
        assert layout.height == pytest.approx(
            len(expected_lines) * scheme.body_font.leading + 2 * 20 + scheme.text_spacing
        )

    def test_left_accent_wraps_narrower(self):
        vibrant = measure_text_block(LONG_TEXT, WIDTH, get_scheme("vibrant"))
        assert vibrant.padding_h == 30

    def test_measurement_is_repeatable(self):
        scheme = get_scheme("elegant")
        assert measure_text_block(LONG_TEXT, WIDTH, scheme) == measure_text_block(LONG_TEXT, WIDTH, scheme)

    def test_wide_bitmap_uses_aspect_height(self, config):
        image = ResolvedImage(reference=None, bitmap=Image.new("RGB", (200, 100)))
        scheme = get_scheme("modern")

        layout = measure_image_block(image, WIDTH, scheme, config)

        assert layout.frame_height == pytest.approx(WIDTH / 2)
        assert layout.draw_width == pytest.approx(WIDTH)
        assert layout.height == pytest.approx(WIDTH / 2 + scheme.image_spacing)

    def test_tall_bitmap_is_capped_and_narrowed(self, config):
        image = ResolvedImage(reference=None, bitmap=Image.new("RGB", (100, 200)))

        layout = measure_image_block(image, WIDTH, get_scheme("modern"), config)

        assert layout.frame_height == 280
        assert layout.draw_width == pytest.approx(140)

    def test_placeholder_uses_default_height(self, config):
        image = ResolvedImage(reference=None, bitmap=None, description="gone")
        scheme = get_scheme("classic")

        layout = measure_image_block(image, WIDTH, scheme, config)

        assert layout.is_placeholder
        assert layout.height == 200 + scheme.image_spacing

    def test_header_height_includes_spacing(self):
        scheme = get_scheme("modern")

        header = measure_header("Ada Lovelace", "General Portfolio", WIDTH, scheme)

        assert header.title_lines == ("Ada Lovelace",)
        assert header.height == pytest.approx(header.chrome_height + scheme.section_spacing)


class TestMeasurePair:
    """Tests for measure_pair()."""

    def test_pair_height_is_sum_of_elements(self, config):
        # Arrange
        valid = "a" * 24
        resolver = ImageResolver(
            [ImageReference(valid)],
            BitmapCache({valid: Image.new("RGB", (400, 100))}),
        )
        pair = ContentPair(text=(TextItem("Hello"),), image=ImageItem(0))
        scheme = get_scheme("modern")

        # Act
        layout = measure_pair(pair, resolver, WIDTH, scheme, config)

        # Assert
        assert layout.height == pytest.approx(layout.text.height + layout.image.height)
        assert layout.ordered(image_first=False) == [layout.text, layout.image]
        assert layout.ordered(image_first=True) == [layout.image, layout.text]

    def test_whitespace_text_is_not_measured(self, config):
        pair = ContentPair(text=(TextItem("   "),), image=None)

        layout = measure_pair(pair, ImageResolver([]), WIDTH, get_scheme("modern"), config)

        assert layout.is_empty
        assert layout.height == 0
