"""
Module: builder.parsing

Purpose:
    Content Parser and Content Pair Builder. Converts a compiled body
    into sections and each section into schedulable content pairs.

Key Functions:
    - parse_sections(): Body -> sections
    - build_content_items(): Section lines -> text/image items
    - build_content_pairs(): Items -> pairs
    - build_section_pairs(): Sections -> pairs with shared image index

Used By:
    - builder.output.assembler: Document assembly
"""

from .parser import (
    parse_sections,
    section_title,
    is_document_title,
    INTRODUCTION_TITLE,
)
from .pairs import (
    IMAGE_TOKEN_PATTERN,
    build_content_items,
    build_content_pairs,
    build_section_pairs,
    new_image_counter,
)

__all__ = [
    "parse_sections",
    "section_title",
    "is_document_title",
    "INTRODUCTION_TITLE",
    "IMAGE_TOKEN_PATTERN",
    "build_content_items",
    "build_content_pairs",
    "build_section_pairs",
    "new_image_counter",
]
