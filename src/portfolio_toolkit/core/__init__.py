"""
Portfolio Toolkit Core Package

Shared data models and utilities. Everything here is pure data: the
document handed over by the content compiler and the parsed structures
derived from it.
"""

from .models import (
    ImageReference,
    PortfolioDocument,
    is_valid_image_id,
    Section,
    TextItem,
    ImageItem,
    ContentPair,
)

__all__ = [
    "ImageReference",
    "PortfolioDocument",
    "is_valid_image_id",
    "Section",
    "TextItem",
    "ImageItem",
    "ContentPair",
]
