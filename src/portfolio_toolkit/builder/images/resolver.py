"""
Module: builder.images.resolver

Purpose:
    Resolve an ImageItem from the parsed body into something drawable:
    either a cached bitmap or a placeholder with a caption.

Resolution Order:
    1. By the running image index assigned at parse time
    2. By fuzzy description match, only when the item has no index
    3. Invalid ids (validity predicate) and cache misses -> placeholder

Dependencies:
    - difflib (std)
    - PIL: Image type
    - builder.images.cache: BitmapCache

Used By:
    - builder.layout.geometry: Image block measurement
    - builder.layout.paginator: Pair measurement
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from PIL import Image

from portfolio_toolkit.core.models import ImageItem, ImageReference

from .cache import BitmapCache

logger = logging.getLogger(__name__)

FUZZY_MATCH_CUTOFF = 0.6


@dataclass(frozen=True)
class ResolvedImage:
    """
    Outcome of resolving one image token.

    Attributes:
        reference: Matched image reference, if any
        bitmap: Cached bitmap, or None when a placeholder must be drawn
        description: Caption for the placeholder
    """

    reference: Optional[ImageReference]
    bitmap: Optional[Image.Image]
    description: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.bitmap is None

    @property
    def aspect_ratio(self) -> Optional[float]:
        """Width / height of the bitmap, or None for placeholders."""
        if self.bitmap is None:
            return None
        width, height = self.bitmap.size
        if width <= 0 or height <= 0:
            return None
        return width / height


def match_by_description(
    description: str,
    images: Sequence[ImageReference],
) -> Optional[ImageReference]:
    """
    Find the image whose description best matches.

    Tries an exact (case-insensitive) match, then containment either
    way, then difflib similarity.

    Args:
        description: Description from an `[IMAGE: ...]` token
        images: Document image references

    Returns:
        Best match, or None
    """
    needle = description.strip().lower()
    if not needle or not images:
        return None

    for image in images:
        if image.description.strip().lower() == needle:
            return image

    for image in images:
        haystack = image.description.strip().lower()
        if haystack and (needle in haystack or haystack in needle):
            return image

    candidates = [image.description.strip().lower() for image in images]
    close = difflib.get_close_matches(needle, candidates, n=1, cutoff=FUZZY_MATCH_CUTOFF)
    if close:
        return images[candidates.index(close[0])]
    return None


class ImageResolver:
    """
    Resolves image tokens against one document's images and bitmaps.

    Example:
        >>> resolver = ImageResolver(document.images, bitmaps)
        >>> resolver.resolve(ImageItem(index=2)).is_placeholder
        True
    """

    def __init__(
        self,
        images: Sequence[ImageReference],
        bitmaps: Optional[BitmapCache] = None,
    ) -> None:
        self._images = tuple(images)
        self._bitmaps = bitmaps if bitmaps is not None else BitmapCache.empty()

    def find_reference(self, item: ImageItem) -> Optional[ImageReference]:
        if item.index is not None:
            if 0 <= item.index < len(self._images):
                return self._images[item.index]
            return None
        return match_by_description(item.description, self._images)

    def resolve(self, item: ImageItem) -> ResolvedImage:
        """
        Resolve an image token. Never raises.

        Args:
            item: Parsed image token

        Returns:
            ResolvedImage (placeholder when unresolvable)
        """
        reference = self.find_reference(item)
        if reference is None:
            logger.debug(f"Image token {item.index} has no reference, using placeholder")
            return ResolvedImage(reference=None, bitmap=None, description=item.description)

        description = reference.description or item.description
        if not reference.is_resolvable:
            logger.debug(f"Image id {reference.id!r} is not resolvable, using placeholder")
            return ResolvedImage(reference=reference, bitmap=None, description=description)

        bitmap = self._bitmaps.get_bitmap(reference.id)
        if bitmap is None:
            logger.debug(f"Image {reference.id} not cached, using placeholder")
        return ResolvedImage(reference=reference, bitmap=bitmap, description=description)
