"""
Module: builder.styles.scheme

Purpose:
    Building blocks of a visual theme. A DesignScheme is an immutable
    bundle of colors, fonts, radii, shadow and spacing constants, with
    the border decoration and page background expressed as closed sets
    of strategy dataclasses instead of nullable fields.

Key Classes:
    - FontSpec: ReportLab font name, size and line height
    - Shadow: Drop shadow parameters
    - BorderStyle: NoBorder | SolidBorder | SubtleBorder | AccentBorder
      | LeftAccentBorder | TopBottomBorder
    - PageBackground: SolidBackground | RotatingBackground
    - DesignScheme: Complete theme

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.styles.catalog: Theme definitions
    - builder.layout.geometry: Padding and font metrics
    - builder.output.renderer: Drawing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

# Text card insets
TEXT_PADDING_HORIZONTAL = 20.0
TEXT_PADDING_HORIZONTAL_ACCENT_BAR = 30.0  # clears the left accent bar
TEXT_PADDING_VERTICAL = 20.0


class ThemeName(str, Enum):
    """Selectable portfolio themes."""
    MODERN = "modern"
    CLASSIC = "classic"
    ELEGANT = "elegant"
    VIBRANT = "vibrant"
    MINIMAL = "minimal"
    PROFESSIONAL = "professional"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class BorderMode(str, Enum):
    """Border decoration drawn around text cards."""
    NONE = "none"
    SOLID = "solid"
    SUBTLE = "subtle"
    ACCENT = "accent"
    LEFT_ACCENT = "leftAccent"
    TOP_BOTTOM = "topBottom"

    def __str__(self) -> str:
        return self.value


class HeaderChrome(str, Enum):
    """Decoration behind the page header on the first page."""
    BANNER = "banner"
    RULE = "rule"
    OVERLAY = "overlay"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FontSpec:
    """
    ReportLab font descriptor.

    Attributes:
        name: Standard ReportLab font name (e.g. "Helvetica-Bold")
        size: Font size in points
        line_height_ratio: Leading as a multiple of size
    """

    name: str
    size: float
    line_height_ratio: float = 1.35

    @property
    def leading(self) -> float:
        """Baseline-to-baseline distance in points."""
        return self.size * self.line_height_ratio


@dataclass(frozen=True, slots=True)
class Shadow:
    """
    Drop shadow parameters (top-down page coordinates).

    Attributes:
        offset_x: Horizontal offset in points (positive = right)
        offset_y: Vertical offset in points (positive = down)
        blur: Spread of the soft edge in points
        opacity: Shadow opacity 0..1
    """

    offset_x: float
    offset_y: float
    blur: float
    opacity: float


# ─────────────────────────────────────────────────────────────────────────────
# Border strategies
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BorderStyle:
    """Base class for border decoration strategies."""

    mode: ClassVar[BorderMode]

    @property
    def horizontal_padding(self) -> float:
        return TEXT_PADDING_HORIZONTAL

    @property
    def vertical_padding(self) -> float:
        return TEXT_PADDING_VERTICAL


@dataclass(frozen=True)
class NoBorder(BorderStyle):
    mode: ClassVar[BorderMode] = BorderMode.NONE


@dataclass(frozen=True)
class SolidBorder(BorderStyle):
    """Full stroked outline, in the secondary accent when requested."""

    mode: ClassVar[BorderMode] = BorderMode.SOLID
    use_secondary_accent: bool = False


@dataclass(frozen=True)
class SubtleBorder(BorderStyle):
    """Low-opacity outline in the accent color."""

    mode: ClassVar[BorderMode] = BorderMode.SUBTLE
    opacity: float = 0.25


@dataclass(frozen=True)
class AccentBorder(BorderStyle):
    mode: ClassVar[BorderMode] = BorderMode.ACCENT


@dataclass(frozen=True)
class LeftAccentBorder(BorderStyle):
    """Vertical accent bar along the card's left edge."""

    mode: ClassVar[BorderMode] = BorderMode.LEFT_ACCENT
    bar_width: float = 5.0

    @property
    def horizontal_padding(self) -> float:
        return TEXT_PADDING_HORIZONTAL_ACCENT_BAR


@dataclass(frozen=True)
class TopBottomBorder(BorderStyle):
    """Horizontal rules along the card's top and bottom edges only."""

    mode: ClassVar[BorderMode] = BorderMode.TOP_BOTTOM


# ─────────────────────────────────────────────────────────────────────────────
# Background strategies
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PageBackground:
    """Base class for page background strategies."""

    def color_for(self, flow_index: int) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class SolidBackground(PageBackground):
    color: str

    def color_for(self, flow_index: int) -> str:
        return self.color


@dataclass(frozen=True)
class RotatingBackground(PageBackground):
    """
    Background that cycles through a palette by flow index.

    Example:
        >>> bg = RotatingBackground(("#FFFFFF", "#EEEEEE"))
        >>> bg.color_for(3)
        '#EEEEEE'
    """

    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("RotatingBackground needs at least one color")

    def color_for(self, flow_index: int) -> str:
        return self.colors[flow_index % len(self.colors)]


# ─────────────────────────────────────────────────────────────────────────────
# Scheme
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DesignScheme:
    """
    Complete visual theme (immutable).

    Selected once per render and read-only for its duration. Colors are
    "#RRGGBB" strings; fonts are standard ReportLab font names so text
    metrics never depend on installed font files.

    Attributes:
        name: Theme identifier
        accent: Primary accent color (headings, bars, banner)
        accent_secondary: Secondary accent (solid borders, subtitle rules)
        background: Page background strategy
        card_background: Fill of text cards
        section_background: Fill of the halo behind text cards
        text_color: Body text color
        secondary_text_color: Captions and subtitles
        title_font: Page header title font
        section_font: Section heading font
        body_font: Card text font
        corner_radius: Radius for cards and images
        shadow: Drop shadow, or None for flat themes
        image_spacing: Gap below every image block
        text_spacing: Gap below every text block and heading
        section_spacing: Gap below the page header
        border: Border decoration strategy
        border_width: Stroke width for borders and rules
        header: Page header chrome
    """

    name: ThemeName
    accent: str
    accent_secondary: str
    background: PageBackground
    card_background: str
    section_background: str
    text_color: str
    secondary_text_color: str
    title_font: FontSpec
    section_font: FontSpec
    body_font: FontSpec
    corner_radius: float
    shadow: Optional[Shadow]
    image_spacing: float
    text_spacing: float
    section_spacing: float
    border: BorderStyle
    border_width: float
    header: HeaderChrome

    @property
    def display_name(self) -> str:
        return self.name.display_name

    @property
    def border_mode(self) -> BorderMode:
        return self.border.mode

    def background_for(self, flow_index: int) -> str:
        """Page background color for a page started at this flow index."""
        return self.background.color_for(flow_index)
