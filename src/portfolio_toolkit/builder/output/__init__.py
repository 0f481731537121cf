"""
Module: builder.output

Purpose:
    PDF rendering and document assembly for portfolios.
    Converts LayoutResult to PDF using ReportLab and rasterizes
    previews with PyMuPDF.

Key Functions:
    - assemble_portfolio(): Document + theme -> PDF bytes
    - plan_portfolio(): Document + theme -> LayoutResult
    - render_to_pdf_bytes(): Draw a LayoutResult
    - render_portfolio(): Draw a planned portfolio with its PDF metadata
    - render_previews(): PDF -> PNG pages

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - fitz (PyMuPDF): Preview rasterization

Used By:
    - builder.controller: Pipeline orchestration
"""

from .renderer import PageRenderer, PdfMetadata, render_to_pdf_bytes
from .assembler import (
    assemble_portfolio,
    plan_portfolio,
    render_portfolio,
    build_flow_sections,
    FALLBACK_SECTION_TITLE,
    STUDENT_REMARKS_TITLE,
    INSTRUCTOR_REMARKS_TITLE,
)
from .preview import render_previews, count_pages

__all__ = [
    "PageRenderer",
    "PdfMetadata",
    "render_to_pdf_bytes",
    "assemble_portfolio",
    "plan_portfolio",
    "render_portfolio",
    "build_flow_sections",
    "FALLBACK_SECTION_TITLE",
    "STUDENT_REMARKS_TITLE",
    "INSTRUCTOR_REMARKS_TITLE",
    "render_previews",
    "count_pages",
]
