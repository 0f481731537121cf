"""
Module: builder.layout.geometry

Purpose:
    The single source of block geometry. The paginator uses these
    measurements to decide page breaks and the renderer draws from the
    very same layout objects, so an estimated height is always the
    height actually consumed on the page.

Key Functions:
    - wrap_text(): Wrap text with ReportLab font metrics
    - measure_header(): Portfolio page header
    - measure_section_title(): Section heading block
    - measure_text_block(): Text card block
    - measure_image_block(): Image or placeholder block
    - measure_pair(): Text + image pair

Formulas:
    title  = wrapped lines x section leading + text_spacing
    text   = wrapped lines x body leading (at width - 2 x h_pad)
             + 2 x v_pad + text_spacing
    image  = min(max_image_height, width / aspect) + image_spacing
             (placeholder: default_image_height + image_spacing)

Dependencies:
    - reportlab.lib.utils.simpleSplit: Line wrapping
    - builder.styles: DesignScheme
    - builder.images.resolver: ResolvedImage

Used By:
    - builder.layout.paginator: Page break decisions
    - builder.output.renderer: Drawing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from reportlab.lib.utils import simpleSplit

from portfolio_toolkit.builder.images import ImageResolver, ResolvedImage
from portfolio_toolkit.builder.styles import DesignScheme, FontSpec
from portfolio_toolkit.core.models import ContentPair

from .config import LayoutConfig

# Header chrome insets
HEADER_PADDING = 18.0
HEADER_SUBTITLE_GAP = 6.0

# Halo drawn around text cards in the section background color
CARD_HALO = 10.0


class ElementKind(str, Enum):
    """Kinds of placed blocks."""
    HEADER = "header"
    HEADING = "heading"
    TEXT = "text"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


def wrap_text(text: str, font: FontSpec, max_width: float) -> List[str]:
    """
    Wrap text into lines that fit max_width.

    Explicit newlines are kept; a blank source line stays a blank line.

    Args:
        text: Text to wrap
        font: Font used to measure
        max_width: Available line width in points

    Returns:
        Wrapped lines (at least one)
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(simpleSplit(paragraph, font.name, font.size, max_width) or [""])
    return lines


def subtitle_font(scheme: DesignScheme) -> FontSpec:
    """Font for the header subtitle, derived from the body font."""
    return FontSpec(scheme.body_font.name, scheme.body_font.size + 2)


# ─────────────────────────────────────────────────────────────────────────────
# Layout objects
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HeaderLayout:
    """
    Portfolio header on the first page.

    Attributes:
        title_lines: Wrapped student name
        subtitle: Subtitle line
        chrome_height: Height of the banner / rule / overlay box
        spacing: Gap below the chrome
    """

    title_lines: Tuple[str, ...]
    subtitle: str
    title_font: FontSpec
    subtitle_font: FontSpec
    chrome_height: float
    spacing: float

    kind = ElementKind.HEADER

    @property
    def height(self) -> float:
        return self.chrome_height + self.spacing


@dataclass(frozen=True)
class TitleLayout:
    """Section heading: wrapped lines plus trailing spacing."""

    title: str
    lines: Tuple[str, ...]
    font: FontSpec
    spacing: float

    kind = ElementKind.HEADING

    @property
    def text_height(self) -> float:
        return len(self.lines) * self.font.leading

    @property
    def height(self) -> float:
        return self.text_height + self.spacing


@dataclass(frozen=True)
class TextBlockLayout:
    """
    Text card geometry.

    Attributes:
        lines: Wrapped lines at card width minus horizontal padding
        font: Body font
        card_width: Full card width
        padding_h: Horizontal inset of text inside the card
        padding_v: Vertical inset of text inside the card
        spacing: Gap below the card
    """

    text: str
    lines: Tuple[str, ...]
    font: FontSpec
    card_width: float
    padding_h: float
    padding_v: float
    spacing: float

    kind = ElementKind.TEXT

    @property
    def text_height(self) -> float:
        return len(self.lines) * self.font.leading

    @property
    def card_height(self) -> float:
        return self.text_height + 2 * self.padding_v

    @property
    def height(self) -> float:
        return self.card_height + self.spacing


@dataclass(frozen=True)
class ImageBlockLayout:
    """
    Image (or placeholder) geometry.

    The frame is the box reserved on the page; the bitmap is drawn
    aspect-fit and centered inside it.

    Attributes:
        image: Resolution outcome
        frame_width: Reserved width (content width)
        frame_height: Reserved height
        draw_width: Bitmap width after aspect fit (frame_width for placeholders)
        spacing: Gap below the frame
    """

    image: ResolvedImage
    frame_width: float
    frame_height: float
    draw_width: float
    spacing: float

    kind = ElementKind.IMAGE

    @property
    def is_placeholder(self) -> bool:
        return self.image.is_placeholder

    @property
    def draw_height(self) -> float:
        return self.frame_height

    @property
    def height(self) -> float:
        return self.frame_height + self.spacing


BlockLayout = Union[HeaderLayout, TitleLayout, TextBlockLayout, ImageBlockLayout]


@dataclass(frozen=True)
class PairLayout:
    """Measured content pair."""

    text: Optional[TextBlockLayout]
    image: Optional[ImageBlockLayout]

    @property
    def height(self) -> float:
        height = 0.0
        if self.text is not None:
            height += self.text.height
        if self.image is not None:
            height += self.image.height
        return height

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.image is None

    def ordered(self, image_first: bool) -> List[Union[TextBlockLayout, ImageBlockLayout]]:
        """Present elements in drawing order."""
        order = (self.image, self.text) if image_first else (self.text, self.image)
        return [element for element in order if element is not None]


# ─────────────────────────────────────────────────────────────────────────────
# Measurement
# ─────────────────────────────────────────────────────────────────────────────

def measure_header(
    title: str,
    subtitle: str,
    width: float,
    scheme: DesignScheme,
) -> HeaderLayout:
    """Measure the first-page portfolio header."""
    sub_font = subtitle_font(scheme)
    title_lines = tuple(wrap_text(title, scheme.title_font, width - 2 * HEADER_PADDING))
    content_height = (
        len(title_lines) * scheme.title_font.leading
        + HEADER_SUBTITLE_GAP
        + sub_font.leading
    )
    return HeaderLayout(
        title_lines=title_lines,
        subtitle=subtitle,
        title_font=scheme.title_font,
        subtitle_font=sub_font,
        chrome_height=content_height + 2 * HEADER_PADDING,
        spacing=scheme.section_spacing,
    )


def measure_section_title(title: str, width: float, scheme: DesignScheme) -> TitleLayout:
    """
    Measure a section heading.

    Example:
        >>> layout = measure_section_title("Math", 468, get_scheme("minimal"))
        >>> layout.height == layout.font.leading + 16
        True
    """
    font = scheme.section_font
    return TitleLayout(
        title=title,
        lines=tuple(wrap_text(title, font, width)),
        font=font,
        spacing=scheme.text_spacing,
    )


def measure_text_block(text: str, width: float, scheme: DesignScheme) -> TextBlockLayout:
    """Measure a text card at the given content width."""
    padding_h = scheme.border.horizontal_padding
    padding_v = scheme.border.vertical_padding
    font = scheme.body_font
    return TextBlockLayout(
        text=text,
        lines=tuple(wrap_text(text, font, width - 2 * padding_h)),
        font=font,
        card_width=width,
        padding_h=padding_h,
        padding_v=padding_v,
        spacing=scheme.text_spacing,
    )


def measure_image_block(
    image: ResolvedImage,
    width: float,
    scheme: DesignScheme,
    config: LayoutConfig,
) -> ImageBlockLayout:
    """
    Measure an image block.

    Available bitmaps get `min(max_image_height, width / aspect)`;
    placeholders get the fixed default height.
    """
    aspect = image.aspect_ratio
    if aspect is None:
        frame_height = config.default_image_height
        draw_width = width
    else:
        frame_height = min(config.max_image_height, width / aspect)
        draw_width = min(width, frame_height * aspect)

    return ImageBlockLayout(
        image=image,
        frame_width=width,
        frame_height=frame_height,
        draw_width=draw_width,
        spacing=scheme.image_spacing,
    )


def measure_pair(
    pair: ContentPair,
    resolver: ImageResolver,
    width: float,
    scheme: DesignScheme,
    config: LayoutConfig,
) -> PairLayout:
    """
    Measure a content pair.

    Args:
        pair: Parsed content pair
        resolver: Image resolver for the document
        width: Content width
        scheme: Active theme
        config: Layout configuration

    Returns:
        PairLayout whose height is the space the pair consumes
    """
    text_layout = None
    if pair.has_text:
        text_layout = measure_text_block(pair.joined_text, width, scheme)

    image_layout = None
    if pair.image is not None:
        image_layout = measure_image_block(resolver.resolve(pair.image), width, scheme, config)

    return PairLayout(text=text_layout, image=image_layout)
