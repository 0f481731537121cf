"""
Module: builder.layout.paginator

Purpose:
    Page flow engine. Walks sections and content pairs in document
    order, measures each block with the shared geometry and decides
    where every block lands. Produces page plans only; drawing happens
    later in builder.output.renderer.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. Before a heading, if heading + first pair does not fit, start a
       new page so a heading never sits alone at a page bottom
    2. image_first = flow_index is odd; a fitting pair is placed as
       [image, text] or [text, image]
    3. A pair that does not fit:
       - first pair of a section: first element stays with the heading,
         the second goes to a new page
       - later pairs: each element on its own fresh page
    4. flow_index increments once per pair; a new page's background is
       chosen by the flow index at the moment it starts
    5. A block taller than a whole page is placed at the top margin and
       allowed to overflow (reported in LayoutResult.warnings)

Dependencies:
    - builder.layout.geometry: Block measurement
    - builder.layout.models: PaginationContext, LayoutResult
    - builder.images: ImageResolver

Used By:
    - builder.output.assembler: Document assembly
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from portfolio_toolkit.builder.images import ImageResolver
from portfolio_toolkit.builder.styles import DesignScheme

from .config import LayoutConfig
from .geometry import HeaderLayout, PairLayout, measure_pair, measure_section_title
from .models import FlowSection, LayoutResult, PaginationContext

logger = logging.getLogger(__name__)


def is_image_first(flow_index: int) -> bool:
    """Odd flow indices draw the image before the text."""
    return flow_index % 2 == 1


def paginate(
    sections: Sequence[FlowSection],
    resolver: ImageResolver,
    scheme: DesignScheme,
    config: LayoutConfig,
    *,
    header: Optional[HeaderLayout] = None,
) -> LayoutResult:
    """
    Arrange sections onto pages.

    Args:
        sections: Sections in document order
        resolver: Image resolver for the document
        scheme: Active theme
        config: Layout configuration
        header: Optional first-page header block

    Returns:
        LayoutResult with page plans; always at least one page
    """
    ctx = PaginationContext.begin(config, scheme)

    if header is not None:
        ctx.place(header)

    for section_index, section in enumerate(sections):
        flow_section(ctx, section_index, section, resolver)

    result = ctx.finish()
    logger.info(
        f"Paginated {len(sections)} sections ({result.flow_index} pairs) "
        f"onto {result.page_count} pages"
    )
    return result


def flow_section(
    ctx: PaginationContext,
    section_index: int,
    section: FlowSection,
    resolver: ImageResolver,
) -> None:
    """
    Place one section heading and its pairs.

    Args:
        ctx: Pagination state, mutated in place
        section_index: Index of the section in the document
        section: Section to place
        resolver: Image resolver for the document
    """
    config = ctx.config
    scheme = ctx.scheme
    width = config.content_width

    title = measure_section_title(section.title, width, scheme)
    pairs = [
        layout
        for layout in (
            measure_pair(pair, resolver, width, scheme, config) for pair in section.pairs
        )
        if not layout.is_empty
    ]

    # Keep the heading together with its first pair
    needed = title.height + (pairs[0].height if pairs else 0.0)
    if not ctx.fits(needed):
        ctx.start_new_page()

    ctx.place(title, section_index=section_index)

    for pair_index, pair in enumerate(pairs):
        flow_pair(ctx, pair, section_index=section_index, pair_index=pair_index)


def flow_pair(
    ctx: PaginationContext,
    pair: PairLayout,
    *,
    section_index: int,
    pair_index: int,
) -> None:
    """
    Place one measured pair and advance the flow index.

    Args:
        ctx: Pagination state, mutated in place
        pair: Measured pair
        section_index: Owning section
        pair_index: Position of the pair within its section
    """
    elements = pair.ordered(is_image_first(ctx.flow_index))

    if ctx.fits(pair.height):
        for element in elements:
            ctx.place(element, section_index=section_index, pair_index=pair_index)
    elif pair_index == 0:
        # The first element stays on the heading's page
        first, rest = elements[0], elements[1:]
        ctx.place(first, section_index=section_index, pair_index=pair_index)
        for element in rest:
            ctx.start_new_page()
            ctx.place(element, section_index=section_index, pair_index=pair_index)
    else:
        for element in elements:
            ctx.start_new_page()
            ctx.place(element, section_index=section_index, pair_index=pair_index)

    ctx.flow_index += 1
