"""
Module: builder.images

Purpose:
    Bitmap access for portfolio rendering: providers that fetch
    bitmaps by id, the frozen cache the renderer reads from, and the
    resolver that turns image tokens into bitmaps or placeholders.

Key Classes:
    - ImageProvider: Abstract interface for bitmap access
    - DirectoryImageProvider / MappingImageProvider: Concrete providers
    - BitmapCache: Frozen id -> bitmap mapping
    - ImageResolver / ResolvedImage: Token resolution

Key Functions:
    - prefetch_bitmaps(): Bounded-parallel fetch into a BitmapCache

Used By:
    - builder.layout: Image measurement
    - builder.controller: Build pipeline
"""

from .provider import (
    ImageProvider,
    DirectoryImageProvider,
    MappingImageProvider,
    ImageNotFoundError,
    normalize_mode,
)
from .cache import BitmapCache, prefetch_bitmaps
from .resolver import ImageResolver, ResolvedImage, match_by_description

__all__ = [
    "ImageProvider",
    "DirectoryImageProvider",
    "MappingImageProvider",
    "ImageNotFoundError",
    "normalize_mode",
    "BitmapCache",
    "prefetch_bitmaps",
    "ImageResolver",
    "ResolvedImage",
    "match_by_description",
]
