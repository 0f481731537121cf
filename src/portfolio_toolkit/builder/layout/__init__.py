"""
Module: builder.layout

Purpose:
    Page layout for portfolio rendering. Measures blocks with one
    shared geometry module and arranges them onto fixed-size pages.

Key Functions:
    - paginate(): Arrange sections onto pages
    - measure_pair() / measure_text_block() / measure_image_block()
      / measure_section_title() / measure_header(): Height estimation

Key Classes:
    - LayoutConfig: Configuration for page layout
    - FlowSection: Paginator input
    - PagePlan / Placement / LayoutResult: Paginator output
    - PaginationContext: Explicit page flow state

Used By:
    - builder.output: Rendering and assembly
"""

from .config import LayoutConfig
from .geometry import (
    ElementKind,
    HeaderLayout,
    TitleLayout,
    TextBlockLayout,
    ImageBlockLayout,
    PairLayout,
    wrap_text,
    measure_header,
    measure_section_title,
    measure_text_block,
    measure_image_block,
    measure_pair,
)
from .models import FlowSection, Placement, PagePlan, LayoutResult, PaginationContext
from .paginator import paginate, flow_section, flow_pair, is_image_first

__all__ = [
    # Config
    "LayoutConfig",
    # Geometry
    "ElementKind",
    "HeaderLayout",
    "TitleLayout",
    "TextBlockLayout",
    "ImageBlockLayout",
    "PairLayout",
    "wrap_text",
    "measure_header",
    "measure_section_title",
    "measure_text_block",
    "measure_image_block",
    "measure_pair",
    # Models
    "FlowSection",
    "Placement",
    "PagePlan",
    "LayoutResult",
    "PaginationContext",
    # Functions
    "paginate",
    "flow_section",
    "flow_pair",
    "is_image_first",
]
