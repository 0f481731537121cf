"""
Core Models Package

Immutable data models shared by the parser, layout engine and renderer.

All models in this package are frozen dataclasses, so parsed content can
be measured in one pass and drawn in another without any chance of the
two passes seeing different data.
"""

from .document import (
    ImageReference,
    PortfolioDocument,
    is_valid_image_id,
    RESERVED_IMAGE_ID_PREFIXES,
    VALID_IMAGE_ID_LENGTH,
)
from .content import Section, TextItem, ImageItem, ContentItem, ContentPair

__all__ = [
    "ImageReference",
    "PortfolioDocument",
    "is_valid_image_id",
    "RESERVED_IMAGE_ID_PREFIXES",
    "VALID_IMAGE_ID_LENGTH",
    "Section",
    "TextItem",
    "ImageItem",
    "ContentItem",
    "ContentPair",
]
