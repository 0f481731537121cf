"""
Module: builder.layout.models

Purpose:
    Data models for page layout. Immutable dataclasses for the
    paginator's input and output, plus the mutable PaginationContext
    that the page flow engine threads through every layout step.

Key Classes:
    - FlowSection: Titled list of content pairs (paginator input)
    - Placement: Measured block positioned on a page
    - PagePlan: Complete page layout with its background
    - LayoutResult: Final layout output
    - PaginationContext: Cursor, flow index and page accumulation

Dependencies:
    - dataclasses (std)
    - builder.layout.geometry: Block layouts

Used By:
    - builder.layout.paginator: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from portfolio_toolkit.builder.styles import DesignScheme
from portfolio_toolkit.core.models import ContentPair

from .config import LayoutConfig
from .geometry import BlockLayout, ElementKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowSection:
    """
    A section ready for pagination.

    Attributes:
        title: Heading text
        pairs: Content pairs in document order (may be empty)
    """

    title: str
    pairs: tuple[ContentPair, ...] = ()


@dataclass(frozen=True)
class Placement:
    """
    A measured block positioned on a page.

    Attributes:
        layout: Geometry shared with the renderer
        top: Y offset from page top (points)
        section_index: Section the block belongs to (None for the header)
        pair_index: Pair within the section (None for header and headings)

    Example:
        >>> placement = Placement(layout, top=72)
        >>> placement.bottom == 72 + layout.height
        True
    """

    layout: BlockLayout
    top: float
    section_index: Optional[int] = None
    pair_index: Optional[int] = None

    @property
    def kind(self) -> ElementKind:
        return self.layout.kind

    @property
    def height(self) -> float:
        return self.layout.height

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (top + height)."""
        return self.top + self.layout.height


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        background: Page background color
        placements: Blocks on this page, top to bottom
        height_used: Vertical space consumed below the top margin
    """

    index: int
    background: str
    placements: tuple[Placement, ...]
    height_used: float

    @property
    def placement_count(self) -> int:
        """Number of blocks on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """Check if page has no placements."""
        return len(self.placements) == 0

    def placements_of(self, kind: ElementKind) -> list[Placement]:
        return [p for p in self.placements if p.kind == kind]


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans
        flow_index: Flow index after the last pair (== pairs scheduled)
        warnings: Overflow warnings
        section_page_map: Section index -> page indices it appears on

    Example:
        >>> result.page_count
        2
    """

    pages: tuple[PagePlan, ...]
    flow_index: int = 0
    warnings: list[str] = field(default_factory=list)
    section_page_map: dict[int, list[int]] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of block placements across all pages."""
        return sum(p.placement_count for p in self.pages)

    def placements_of(self, kind: ElementKind) -> list[Placement]:
        return [p for page in self.pages for p in page.placements_of(kind)]


@dataclass
class PaginationContext:
    """
    Mutable page flow state for one paginate() call.

    Owned by a single synchronous call stack and discarded when the
    layout completes.

    Attributes:
        config: Page geometry
        scheme: Active theme (for page backgrounds)
        flow_index: Pairs emitted so far
        cursor_y: Next free Y offset on the current page
        page_index: Index of the current page
    """

    config: LayoutConfig
    scheme: DesignScheme
    flow_index: int = 0
    cursor_y: float = 0.0
    page_index: int = 0
    background: str = ""
    placements: List[Placement] = field(default_factory=list)
    pages: List[PagePlan] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    section_page_map: Dict[int, List[int]] = field(default_factory=dict)

    @classmethod
    def begin(cls, config: LayoutConfig, scheme: DesignScheme) -> PaginationContext:
        """Start on the first page, which always uses rotation index 0."""
        return cls(
            config=config,
            scheme=scheme,
            cursor_y=config.margin_top,
            background=scheme.background_for(0),
        )

    @property
    def remaining_height(self) -> float:
        return self.config.page_bottom - self.cursor_y

    @property
    def is_page_empty(self) -> bool:
        return not self.placements

    def fits(self, height: float) -> bool:
        return height <= self.remaining_height

    def start_new_page(self) -> None:
        """
        Close the current page and start a fresh one.

        No-op while the current page is still empty, so no blank pages
        are ever emitted.
        """
        if self.is_page_empty:
            return
        self._close_page()
        self.page_index += 1
        self.cursor_y = self.config.margin_top
        self.background = self.scheme.background_for(self.flow_index)

    def place(
        self,
        layout: BlockLayout,
        *,
        section_index: Optional[int] = None,
        pair_index: Optional[int] = None,
    ) -> Placement:
        """Place a block at the cursor and advance past it."""
        placement = Placement(
            layout=layout,
            top=self.cursor_y,
            section_index=section_index,
            pair_index=pair_index,
        )
        self.placements.append(placement)
        self.cursor_y = placement.bottom

        if placement.bottom > self.config.page_bottom:
            message = (
                f"{layout.kind} block overflows page {self.page_index}: "
                f"{layout.height:.1f}pt placed with {self.config.page_bottom - placement.top:.1f}pt available"
            )
            logger.warning(message)
            self.warnings.append(message)

        if section_index is not None:
            pages = self.section_page_map.setdefault(section_index, [])
            if self.page_index not in pages:
                pages.append(self.page_index)
        return placement

    def finish(self) -> LayoutResult:
        """Close the last page and build the immutable result."""
        if self.placements or not self.pages:
            self._close_page()
        return LayoutResult(
            pages=tuple(self.pages),
            flow_index=self.flow_index,
            warnings=list(self.warnings),
            section_page_map={k: list(v) for k, v in self.section_page_map.items()},
        )

    def _close_page(self) -> None:
        self.pages.append(PagePlan(
            index=self.page_index,
            background=self.background,
            placements=tuple(self.placements),
            height_used=self.cursor_y - self.config.margin_top,
        ))
        self.placements = []
