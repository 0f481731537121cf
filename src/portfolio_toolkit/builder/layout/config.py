"""
Module: builder.layout.config

Purpose:
    Configuration for the portfolio page layout engine.
    Defines page dimensions, margins and image sizing limits.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.geometry: Block measurement
    - builder.layout.paginator: Page flow
    - builder.output.renderer: Page size
"""

from __future__ import annotations

from dataclasses import dataclass


# US Letter in PDF points (72 per inch)
DEFAULT_PAGE_WIDTH_PT = 8.5 * 72
DEFAULT_PAGE_HEIGHT_PT = 11 * 72
DEFAULT_MARGIN_PT = 72.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All values are PDF points with a top-down y axis; the renderer
    flips coordinates when drawing.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin_top: Top margin in points
        margin_bottom: Bottom margin in points
        margin_left: Left margin in points
        margin_right: Right margin in points
        max_image_height: Tallest an available bitmap may be drawn
        default_image_height: Height reserved for placeholders
        show_header: Whether the first page carries the portfolio header

    Example:
        >>> config = LayoutConfig()
        >>> config.available_height
        648.0
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_PT
    page_height: float = DEFAULT_PAGE_HEIGHT_PT

    # Margins
    margin_top: float = DEFAULT_MARGIN_PT
    margin_bottom: float = DEFAULT_MARGIN_PT
    margin_left: float = DEFAULT_MARGIN_PT
    margin_right: float = DEFAULT_MARGIN_PT

    # Images
    max_image_height: float = 280.0
    default_image_height: float = 200.0

    # Behavior
    show_header: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if min(self.margin_top, self.margin_bottom, self.margin_left, self.margin_right) < 0:
            raise ValueError("Margins must be non-negative")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.max_image_height <= 0:
            raise ValueError(f"max_image_height must be positive: {self.max_image_height}")
        if self.default_image_height <= 0:
            raise ValueError(
                f"default_image_height must be positive: {self.default_image_height}"
            )

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_width(self) -> float:
        """Alias used by block measurement."""
        return self.available_width

    @property
    def page_bottom(self) -> float:
        """Lowest y (top-down) content may reach without overflowing."""
        return self.page_height - self.margin_bottom

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)
