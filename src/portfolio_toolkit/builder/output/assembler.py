"""
Module: builder.output.assembler

Purpose:
    Document Assembler: the top-level entry point of the layout engine.
    Parser -> Pair Builder -> Paginator -> Renderer for one document
    and one theme.

Key Functions:
    - build_flow_sections(): Document -> sections ready for pagination
    - plan_portfolio(): Lay out a document without drawing
    - render_portfolio(): Render a planned layout with document metadata
    - assemble_portfolio(): Lay out and render to PDF bytes

Dependencies:
    - builder.parsing: Sections and pairs
    - builder.layout: Geometry and pagination
    - builder.output.renderer: PDF drawing

Used By:
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from portfolio_toolkit.builder.images import BitmapCache, ImageResolver
from portfolio_toolkit.builder.layout import (
    FlowSection,
    LayoutConfig,
    LayoutResult,
    measure_header,
    paginate,
)
from portfolio_toolkit.builder.parsing import build_section_pairs, parse_sections
from portfolio_toolkit.builder.styles import DesignScheme, ThemeName, get_scheme
from portfolio_toolkit.core.models import ContentPair, PortfolioDocument, TextItem

from .renderer import PdfMetadata, render_to_pdf_bytes

logger = logging.getLogger(__name__)

FALLBACK_SECTION_TITLE = "Portfolio Content"
STUDENT_REMARKS_TITLE = "Student Remarks"
INSTRUCTOR_REMARKS_TITLE = "Instructor Remarks"


def _normalize_title(title: str) -> str:
    return " ".join(title.split()).casefold()


def _text_section(title: str, text: str) -> FlowSection:
    pairs = (ContentPair(text=(TextItem(text),)),) if text.strip() else ()
    return FlowSection(title=title, pairs=pairs)


def build_flow_sections(document: PortfolioDocument) -> List[FlowSection]:
    """
    Build the ordered sections for a document.

    Bodies without `##` markers become one "Portfolio Content" block
    holding the raw body unchanged. Remarks are appended as text-only
    sections unless the body already has a section with the same title.

    Args:
        document: Portfolio document

    Returns:
        Sections in the order they are paginated
    """
    sections = parse_sections(document.compiled_body)
    if sections:
        flow = [
            FlowSection(title=section.title, pairs=tuple(pairs))
            for section, pairs in build_section_pairs(sections)
        ]
    else:
        logger.info("No section markers found, rendering body as a single block")
        flow = [_text_section(FALLBACK_SECTION_TITLE, document.compiled_body)]

    existing = {_normalize_title(section.title) for section in flow}
    for title, remarks in (
        (STUDENT_REMARKS_TITLE, document.student_remarks),
        (INSTRUCTOR_REMARKS_TITLE, document.instructor_remarks),
    ):
        if not remarks or not remarks.strip():
            continue
        if _normalize_title(title) in existing:
            logger.debug(f"{title} already embedded in body, not appending")
            continue
        flow.append(_text_section(title, remarks.strip()))

    return flow


def header_subtitle(document: PortfolioDocument, scheme: DesignScheme) -> str:
    label = document.design_pattern_label.strip() or scheme.display_name
    return f"{label} Portfolio"


def plan_portfolio(
    document: PortfolioDocument,
    theme: Union[ThemeName, str],
    bitmaps: Optional[BitmapCache] = None,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """
    Lay out a portfolio without drawing it.

    Args:
        document: Portfolio document
        theme: Theme name
        bitmaps: Prefetched bitmaps (empty cache if omitted)
        config: Layout configuration (defaults to US Letter, 72pt margins)

    Returns:
        LayoutResult with page plans

    Raises:
        ValueError: If the theme name is unknown
    """
    scheme = get_scheme(theme)
    config = config or LayoutConfig()
    resolver = ImageResolver(document.images, bitmaps)

    header = None
    if config.show_header:
        header = measure_header(
            document.student_name,
            header_subtitle(document, scheme),
            config.content_width,
            scheme,
        )

    return paginate(
        build_flow_sections(document),
        resolver,
        scheme,
        config,
        header=header,
    )


def render_portfolio(
    document: PortfolioDocument,
    layout: LayoutResult,
    theme: Union[ThemeName, str],
    config: Optional[LayoutConfig] = None,
    *,
    show_footer: bool = True,
) -> bytes:
    """
    Render an already planned portfolio to PDF bytes.

    The PDF title, author and subject come from the document, with the
    header subtitle as the subject.
    """
    scheme = get_scheme(theme)
    metadata = PdfMetadata(
        title=document.title,
        author=document.student_name,
        subject=header_subtitle(document, scheme),
    )
    return render_to_pdf_bytes(
        layout,
        scheme,
        config or LayoutConfig(),
        metadata=metadata,
        show_footer=show_footer,
    )


def assemble_portfolio(
    document: PortfolioDocument,
    theme: Union[ThemeName, str],
    bitmaps: Optional[BitmapCache] = None,
    config: Optional[LayoutConfig] = None,
    *,
    show_footer: bool = True,
) -> bytes:
    """
    Lay out and render a portfolio to PDF.

    Args:
        document: Portfolio document
        theme: Theme name
        bitmaps: Prefetched bitmaps (empty cache if omitted)
        config: Layout configuration
        show_footer: Draw page numbers in the bottom margin

    Returns:
        PDF bytes

    Example:
        >>> pdf = assemble_portfolio(doc, "modern", bitmaps)
        >>> pdf[:5]
        b'%PDF-'
    """
    scheme = get_scheme(theme)
    config = config or LayoutConfig()

    layout = plan_portfolio(document, scheme.name, bitmaps, config)
    for warning in layout.warnings:
        logger.debug(f"Layout warning: {warning}")

    return render_portfolio(document, layout, scheme.name, config, show_footer=show_footer)
