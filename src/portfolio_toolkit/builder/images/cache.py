"""
Module: builder.images.cache

Purpose:
    Immutable bitmap cache and the bounded-parallel prefetch that fills
    it. Prefetch is the only concurrent phase of a build: one task per
    distinct valid image id, run before layout starts. The cache is
    frozen once every task has finished, so the synchronous layout and
    drawing passes only ever do lookups.

Key Classes:
    - BitmapCache: Read-only mapping of image id to PIL Image

Key Functions:
    - prefetch_bitmaps(): Fetch all document bitmaps in parallel

Dependencies:
    - concurrent.futures: Thread pool execution
    - PIL: Image type

Used By:
    - builder.controller: Build pipeline
    - builder.images.resolver: Bitmap lookups
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from PIL import Image

from portfolio_toolkit.core.models import ImageReference, is_valid_image_id

from .provider import ImageNotFoundError, ImageProvider, normalize_mode

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class BitmapCache(Mapping[str, Image.Image]):
    """
    Read-only mapping of image id to decoded bitmap.

    Lookups for ids that fail the validity predicate always miss, so a
    placeholder is drawn even if a bitmap was somehow stored for them.

    Example:
        >>> cache = BitmapCache({"65f0c2a9e4b0a1b2c3d4e5f6": img})
        >>> cache.get_bitmap("missing-1") is None
        True
    """

    def __init__(self, bitmaps: Optional[Mapping[str, Image.Image]] = None) -> None:
        self._bitmaps = MappingProxyType(dict(bitmaps or {}))

    def __getitem__(self, image_id: str) -> Image.Image:
        return self._bitmaps[image_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bitmaps)

    def __len__(self) -> int:
        return len(self._bitmaps)

    def get_bitmap(self, image_id: Optional[str]) -> Optional[Image.Image]:
        """Bitmap for a valid id, or None."""
        if not is_valid_image_id(image_id):
            return None
        return self._bitmaps.get(image_id)

    @classmethod
    def empty(cls) -> BitmapCache:
        return cls()


def _distinct_valid_ids(images: Iterable[ImageReference]) -> List[str]:
    seen: Dict[str, None] = {}
    for image in images:
        if is_valid_image_id(image.id):
            seen.setdefault(image.id, None)
    return list(seen)


def prefetch_bitmaps(
    images: Iterable[ImageReference],
    provider: ImageProvider,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> BitmapCache:
    """
    Fetch bitmaps for every distinct valid image id.

    Invalid ids are skipped without contacting the provider. Failed
    fetches are logged and left out of the cache; they render as
    placeholders.

    Args:
        images: Image references from the document
        provider: Bitmap source
        max_workers: Upper bound on concurrent fetches

    Returns:
        Frozen BitmapCache

    Raises:
        ValueError: If max_workers is not positive
    """
    if max_workers <= 0:
        raise ValueError(f"max_workers must be positive: {max_workers}")

    image_ids = _distinct_valid_ids(images)
    if not image_ids:
        return BitmapCache.empty()

    bitmaps: Dict[str, Image.Image] = {}
    failed = 0

    with ThreadPoolExecutor(max_workers=min(max_workers, len(image_ids))) as executor:
        futures = {executor.submit(provider.get_bitmap, image_id): image_id for image_id in image_ids}
        for future in as_completed(futures):
            image_id = futures[future]
            try:
                bitmaps[image_id] = normalize_mode(future.result())
            except ImageNotFoundError as e:
                failed += 1
                logger.warning(f"Image {image_id} unavailable: {e}")
            except Exception as e:
                # Storage or network failures degrade to placeholders
                failed += 1
                logger.warning(f"Image {image_id} fetch failed: {e}", exc_info=True)

    logger.info(f"Prefetched {len(bitmaps)}/{len(image_ids)} bitmaps ({failed} unavailable)")
    return BitmapCache(bitmaps)
