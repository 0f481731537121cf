"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page: background fill, then every
    placement drawn from the same layout object the paginator measured.

Key Functions:
    - render_to_pdf_bytes(): Render layout to PDF bytes

Key Classes:
    - PageRenderer: Draws headers, headings, text cards, images and
      placeholders onto a canvas; every draw returns the height consumed
    - PdfMetadata: Document info written to the PDF

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - builder.layout: Page plans and block layouts

Used By:
    - builder.output.assembler: Document assembly
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image
from reportlab.lib.colors import HexColor, white
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from portfolio_toolkit.builder.images import normalize_mode
from portfolio_toolkit.builder.layout import (
    ElementKind,
    HeaderLayout,
    ImageBlockLayout,
    LayoutConfig,
    LayoutResult,
    PagePlan,
    Placement,
    TextBlockLayout,
    TitleLayout,
)
from portfolio_toolkit.builder.layout.geometry import (
    CARD_HALO,
    HEADER_PADDING,
    HEADER_SUBTITLE_GAP,
)
from portfolio_toolkit.builder.styles import (
    BorderMode,
    DesignScheme,
    HeaderChrome,
    LeftAccentBorder,
    SolidBorder,
    SubtleBorder,
)

logger = logging.getLogger(__name__)

# Footer configuration
FOOTER_FONT_SIZE = 8
FOOTER_OFFSET_PT = 30  # baseline distance from page bottom

# Placeholder configuration
PLACEHOLDER_DASH = (6, 4)
PLACEHOLDER_GLYPH_WIDTH = 48
PLACEHOLDER_GLYPH_HEIGHT = 36
PLACEHOLDER_CAPTION_OFFSET = 14  # caption baseline above the frame bottom

OVERLAY_ALPHA = 0.12
SHADOW_STEPS = 4


@dataclass(frozen=True)
class PdfMetadata:
    """Document info written to the PDF."""

    title: str = ""
    author: str = ""
    creator: str = "Portfolio Toolkit"
    subject: str = ""


def _color(value: str):
    return HexColor(value)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    normalize_mode(img).save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height: float, top: float, height: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height: Page height in points
        top: Y position from page top
        height: Height of the element

    Returns:
        Y of the element's bottom edge, measured from the page bottom
    """
    return page_height - top - height


class PageRenderer:
    """
    Draws page plans onto a ReportLab canvas.

    All public draw methods take a top-down `top` and return the height
    they consumed, which is always the layout's measured height.

    Example:
        >>> renderer = PageRenderer(c, scheme, config)
        >>> consumed = renderer.draw_text_block(100, text_layout)
        >>> consumed == text_layout.height
        True
    """

    def __init__(
        self,
        c: canvas.Canvas,
        scheme: DesignScheme,
        config: LayoutConfig,
        *,
        footer_label: str = "",
        show_footer: bool = True,
    ) -> None:
        self.c = c
        self.scheme = scheme
        self.config = config
        self.footer_label = footer_label
        self.show_footer = show_footer

    @property
    def left(self) -> float:
        return self.config.margin_left

    def _y(self, top: float, height: float) -> float:
        return _transform_y(self.config.page_height, top, height)

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    def draw_page(self, page: PagePlan, page_count: int) -> None:
        """Draw background, every placement, then the footer."""
        self.draw_background(page.background)
        for placement in page.placements:
            self.draw_placement(placement)
        if self.show_footer:
            self.draw_footer(page.index, page_count)

    def draw_background(self, color: str) -> None:
        c = self.c
        c.saveState()
        c.setFillColor(_color(color))
        c.rect(0, 0, self.config.page_width, self.config.page_height, stroke=0, fill=1)
        c.restoreState()

    def draw_placement(self, placement: Placement) -> float:
        layout = placement.layout
        if placement.kind == ElementKind.HEADER:
            return self.draw_header(placement.top, layout)
        if placement.kind == ElementKind.HEADING:
            return self.draw_section_title(placement.top, layout)
        if placement.kind == ElementKind.TEXT:
            return self.draw_text_block(placement.top, layout)
        return self.draw_image_block(placement.top, layout)

    def draw_footer(self, page_index: int, page_count: int) -> None:
        """Draw centered page number in the bottom margin."""
        text = f"Page {page_index + 1} of {page_count}"
        if self.footer_label:
            text = f"{self.footer_label}  |  {text}"

        c = self.c
        c.saveState()
        c.setFont(self.scheme.body_font.name, FOOTER_FONT_SIZE)
        c.setFillColor(_color(self.scheme.secondary_text_color))
        c.drawCentredString(self.config.page_width / 2, FOOTER_OFFSET_PT, text)
        c.restoreState()

    # ─────────────────────────────────────────────────────────────────────────
    # Header and headings
    # ─────────────────────────────────────────────────────────────────────────

    def draw_header(self, top: float, layout: HeaderLayout) -> float:
        """
        Draw the portfolio header with the theme's chrome.

        Banner: filled accent box with light text. Rule: plain text with
        a single rule under it. Overlay: translucent accent band across
        the full page width.
        """
        c = self.c
        scheme = self.scheme
        width = self.config.content_width
        chrome = scheme.header
        box_y = self._y(top, layout.chrome_height)

        c.saveState()
        if chrome == HeaderChrome.BANNER:
            c.setFillColor(_color(scheme.accent))
            c.roundRect(self.left, box_y, width, layout.chrome_height,
                        scheme.corner_radius, stroke=0, fill=1)
            title_color, subtitle_color = white, white
        elif chrome == HeaderChrome.OVERLAY:
            c.setFillColor(_color(scheme.accent))
            c.setFillAlpha(OVERLAY_ALPHA)
            c.rect(0, box_y, self.config.page_width,
                   self.config.page_height - box_y, stroke=0, fill=1)
            c.setFillAlpha(1)
            title_color = _color(scheme.accent)
            subtitle_color = _color(scheme.accent_secondary)
        else:
            c.setStrokeColor(_color(scheme.accent))
            c.setLineWidth(scheme.border_width)
            c.line(self.left, box_y, self.left + width, box_y)
            title_color = _color(scheme.text_color)
            subtitle_color = _color(scheme.secondary_text_color)

        text_x = self.left + HEADER_PADDING
        baseline = top + HEADER_PADDING
        c.setFillColor(title_color)
        c.setFont(layout.title_font.name, layout.title_font.size)
        for line in layout.title_lines:
            baseline += layout.title_font.leading
            c.drawString(text_x, self.config.page_height - baseline, line)

        baseline += HEADER_SUBTITLE_GAP + layout.subtitle_font.leading
        c.setFillColor(subtitle_color)
        c.setFont(layout.subtitle_font.name, layout.subtitle_font.size)
        c.drawString(text_x, self.config.page_height - baseline, layout.subtitle)
        c.restoreState()

        return layout.height

    def draw_section_title(self, top: float, layout: TitleLayout) -> float:
        c = self.c
        c.saveState()
        c.setFillColor(_color(self.scheme.accent))
        c.setFont(layout.font.name, layout.font.size)
        baseline = top
        for line in layout.lines:
            baseline += layout.font.leading
            c.drawString(self.left, self.config.page_height - baseline, line)
        c.restoreState()
        return layout.height

    # ─────────────────────────────────────────────────────────────────────────
    # Text cards
    # ─────────────────────────────────────────────────────────────────────────

    def draw_text_block(self, top: float, layout: TextBlockLayout) -> float:
        """
        Draw a text card: halo, shadow, card, border decoration, text.

        Args:
            top: Top of the card (points from page top)
            layout: Measured text block

        Returns:
            Height consumed (card plus trailing spacing)
        """
        c = self.c
        scheme = self.scheme
        x = self.left
        width = layout.card_width
        card_height = layout.card_height
        y = self._y(top, card_height)
        radius = scheme.corner_radius

        c.saveState()

        # Halo behind the card
        c.setFillColor(_color(scheme.section_background))
        c.roundRect(x - CARD_HALO, y - CARD_HALO, width + 2 * CARD_HALO,
                    card_height + 2 * CARD_HALO, radius, stroke=0, fill=1)

        self._draw_shadow(x, y, width, card_height, radius)

        c.setFillColor(_color(scheme.card_background))
        self._round_rect(x, y, width, card_height, radius, stroke=0, fill=1)

        self._draw_border(x, y, width, card_height, radius)

        c.setFillColor(_color(scheme.text_color))
        c.setFont(layout.font.name, layout.font.size)
        text_x = x + layout.padding_h
        baseline = top + layout.padding_v
        for line in layout.lines:
            baseline += layout.font.leading
            if line:
                c.drawString(text_x, self.config.page_height - baseline, line)

        c.restoreState()
        return layout.height

    def _draw_border(self, x: float, y: float, width: float, height: float, radius: float) -> None:
        c = self.c
        scheme = self.scheme
        border = scheme.border
        mode = border.mode

        if mode == BorderMode.NONE:
            return

        c.saveState()
        c.setLineWidth(scheme.border_width)
        accent = _color(scheme.accent)

        if mode in (BorderMode.SOLID, BorderMode.ACCENT):
            color = accent
            if isinstance(border, SolidBorder) and border.use_secondary_accent:
                color = _color(scheme.accent_secondary)
            c.setStrokeColor(color)
            self._round_rect(x, y, width, height, radius, stroke=1, fill=0)
        elif mode == BorderMode.SUBTLE:
            c.setStrokeColor(accent)
            opacity = border.opacity if isinstance(border, SubtleBorder) else 0.25
            c.setStrokeAlpha(opacity)
            self._round_rect(x, y, width, height, radius, stroke=1, fill=0)
        elif mode == BorderMode.LEFT_ACCENT:
            bar_width = border.bar_width if isinstance(border, LeftAccentBorder) else 4.0
            c.setFillColor(accent)
            self._round_rect(x, y, bar_width, height, min(radius, bar_width / 2), stroke=0, fill=1)
        elif mode == BorderMode.TOP_BOTTOM:
            c.setStrokeColor(accent)
            c.line(x, y + height, x + width, y + height)
            c.line(x, y, x + width, y)

        c.restoreState()

    def _draw_shadow(self, x: float, y: float, width: float, height: float, radius: float) -> None:
        """Approximate a blurred drop shadow with stacked translucent rects."""
        shadow = self.scheme.shadow
        if shadow is None or shadow.opacity <= 0:
            return

        c = self.c
        c.saveState()
        c.setFillColorRGB(0, 0, 0)
        c.setFillAlpha(shadow.opacity / SHADOW_STEPS)
        sx = x + shadow.offset_x
        sy = y - shadow.offset_y
        for step in range(SHADOW_STEPS):
            spread = shadow.blur * (SHADOW_STEPS - step) / SHADOW_STEPS / 2
            self._round_rect(sx - spread, sy - spread, width + 2 * spread,
                             height + 2 * spread, radius + spread, stroke=0, fill=1)
        c.restoreState()

    def _round_rect(self, x, y, width, height, radius, *, stroke, fill) -> None:
        if radius > 0:
            self.c.roundRect(x, y, width, height, radius, stroke=stroke, fill=fill)
        else:
            self.c.rect(x, y, width, height, stroke=stroke, fill=fill)

    # ─────────────────────────────────────────────────────────────────────────
    # Images
    # ─────────────────────────────────────────────────────────────────────────

    def draw_image_block(self, top: float, layout: ImageBlockLayout) -> float:
        """
        Draw an image block, or a placeholder when no bitmap is available.

        The bitmap is centered in the frame, clipped to the theme's corner
        radius, with the theme shadow drawn in its own graphics state.

        Returns:
            Height consumed (frame plus trailing spacing)
        """
        if layout.is_placeholder:
            self.draw_placeholder(top, layout.frame_width, layout.frame_height,
                                  layout.image.description)
            return layout.height

        c = self.c
        radius = self.scheme.corner_radius
        x = self.left + (layout.frame_width - layout.draw_width) / 2
        y = self._y(top, layout.draw_height)

        self._draw_shadow(x, y, layout.draw_width, layout.draw_height, radius)

        c.saveState()
        if radius > 0:
            path = c.beginPath()
            path.roundRect(x, y, layout.draw_width, layout.draw_height, radius)
            c.clipPath(path, stroke=0, fill=0)
        c.drawImage(
            _pil_to_reader(layout.image.bitmap),
            x,
            y,
            width=layout.draw_width,
            height=layout.draw_height,
            mask="auto",
        )
        c.restoreState()

        return layout.height

    def draw_placeholder(self, top: float, width: float, height: float, description: str) -> float:
        """
        Draw a placeholder frame: dashed border, picture glyph, caption.

        Never raises for any description.
        """
        c = self.c
        scheme = self.scheme
        x = self.left
        y = self._y(top, height)
        radius = scheme.corner_radius
        muted = _color(scheme.secondary_text_color)

        c.saveState()
        c.setFillColor(_color(scheme.section_background))
        self._round_rect(x, y, width, height, radius, stroke=0, fill=1)

        c.setStrokeColor(_color(scheme.accent))
        c.setLineWidth(max(scheme.border_width, 1))
        c.setDash(*PLACEHOLDER_DASH)
        self._round_rect(x, y, width, height, radius, stroke=1, fill=0)
        c.setDash()

        self._draw_picture_glyph(x + width / 2, y + height / 2, muted)

        caption = self._fit_caption(description, width - 2 * HEADER_PADDING)
        if caption:
            c.setFillColor(muted)
            c.setFont(scheme.body_font.name, scheme.body_font.size - 1)
            c.drawCentredString(x + width / 2, y + PLACEHOLDER_CAPTION_OFFSET, caption)
        c.restoreState()
        return height

    def _draw_picture_glyph(self, cx: float, cy: float, color) -> None:
        """Simple landscape-in-a-frame icon centered at (cx, cy)."""
        c = self.c
        w, h = PLACEHOLDER_GLYPH_WIDTH, PLACEHOLDER_GLYPH_HEIGHT
        left, bottom = cx - w / 2, cy - h / 2

        c.saveState()
        c.setStrokeColor(color)
        c.setFillColor(color)
        c.setLineWidth(1.5)
        c.roundRect(left, bottom, w, h, 4, stroke=1, fill=0)

        mountains = c.beginPath()
        mountains.moveTo(left + 4, bottom + 4)
        mountains.lineTo(left + w * 0.38, bottom + h * 0.62)
        mountains.lineTo(left + w * 0.58, bottom + h * 0.38)
        mountains.lineTo(left + w * 0.72, bottom + h * 0.52)
        mountains.lineTo(left + w - 4, bottom + 4)
        mountains.close()
        c.drawPath(mountains, stroke=0, fill=1)

        c.circle(left + w * 0.75, bottom + h * 0.75, 4, stroke=0, fill=1)
        c.restoreState()

    def _fit_caption(self, description: str, max_width: float) -> str:
        text = " ".join((description or "").split())
        if not text:
            return ""
        font = self.scheme.body_font
        lines = simpleSplit(text, font.name, font.size - 1, max_width)
        if len(lines) <= 1:
            return text
        return lines[0].rstrip() + "..."


# ─────────────────────────────────────────────────────────────────────────────
# Entry points
# ─────────────────────────────────────────────────────────────────────────────

def render_to_pdf_bytes(
    layout: LayoutResult,
    scheme: DesignScheme,
    config: LayoutConfig,
    *,
    metadata: Optional[PdfMetadata] = None,
    show_footer: bool = True,
) -> bytes:
    """
    Render layout result to PDF bytes.

    Args:
        layout: Layout result from paginator
        scheme: Theme used for measurement
        config: Layout configuration used for measurement
        metadata: Document info
        show_footer: Draw page numbers in the bottom margin

    Returns:
        Complete PDF document
    """
    metadata = metadata or PdfMetadata()
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=config.page_size, invariant=1)
    c.setTitle(metadata.title)
    c.setAuthor(metadata.author)
    c.setCreator(metadata.creator)
    c.setSubject(metadata.subject)

    renderer = PageRenderer(
        c,
        scheme,
        config,
        footer_label=metadata.author,
        show_footer=show_footer,
    )
    for page in layout.pages:
        renderer.draw_page(page, layout.page_count)
        c.showPage()

    c.save()
    data = buf.getvalue()
    logger.info(f"Rendered {layout.page_count} pages ({len(data)} bytes)")
    return data
