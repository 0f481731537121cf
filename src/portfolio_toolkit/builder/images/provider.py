"""
Module: builder.images.provider

Purpose:
    Abstract interface for fetching portfolio bitmaps by image id.
    The layout engine never calls a provider directly: bitmaps are
    prefetched into a BitmapCache before rendering starts.

Key Classes:
    - ImageProvider: Abstract base class for bitmap access
    - DirectoryImageProvider: Loads `<root>/<id>.<ext>` files
    - MappingImageProvider: In-memory provider (tests, callers with bytes)
    - ImageNotFoundError: Exception for unavailable bitmaps

Dependencies:
    - PIL: Image decoding

Used By:
    - builder.images.cache: Parallel prefetch
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


class ImageNotFoundError(Exception):
    """Bitmap not available for an image id."""
    pass


class ImageProvider(ABC):
    """
    Abstract interface for resolving image ids to bitmaps.

    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def get_bitmap(self, image_id: str) -> Image.Image:
        """
        Fetch and decode the bitmap for an image id.

        Args:
            image_id: Opaque image identifier

        Returns:
            Fully loaded PIL Image

        Raises:
            ImageNotFoundError: If the bitmap is unavailable
        """


DRAWABLE_MODES = ("RGB", "RGBA", "L")


def normalize_mode(image: Image.Image) -> Image.Image:
    """Convert an image to a mode the PDF writer can embed (RGB, RGBA or L)."""
    if image.mode not in DRAWABLE_MODES:
        return image.convert("RGBA")
    return image


def _decode(source: Union[Path, io.BytesIO]) -> Image.Image:
    """Open and fully decode an image so no file handle stays open."""
    image = Image.open(source)
    image.load()
    return normalize_mode(image)


class DirectoryImageProvider(ImageProvider):
    """
    Provider that loads bitmaps from a directory.

    Looks for `<root>/<image_id><ext>` for each configured extension.

    Example:
        >>> provider = DirectoryImageProvider(Path("exports/images"))
        >>> bitmap = provider.get_bitmap("65f0c2a9e4b0a1b2c3d4e5f6")
    """

    def __init__(
        self,
        root: Path,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self._root = Path(root)
        self._extensions = tuple(extensions)

    @property
    def root(self) -> Path:
        return self._root

    def find_path(self, image_id: str) -> Optional[Path]:
        """Locate the file for an id, or None."""
        # Ids are opaque; refuse anything that could escape the directory
        if not image_id or "/" in image_id or "\\" in image_id or image_id.startswith("."):
            return None
        for ext in self._extensions:
            candidate = self._root / f"{image_id}{ext}"
            if candidate.is_file():
                return candidate
        return None

    def get_bitmap(self, image_id: str) -> Image.Image:
        path = self.find_path(image_id)
        if path is None:
            raise ImageNotFoundError(f"No image file for id {image_id!r} in {self._root}")
        try:
            return _decode(path)
        except OSError as e:
            raise ImageNotFoundError(f"Cannot decode {path}: {e}") from e


class MappingImageProvider(ImageProvider):
    """
    Provider backed by an in-memory mapping of id to image or bytes.

    Args:
        images: Mapping of image id to a PIL Image or encoded image bytes
    """

    def __init__(self, images: Mapping[str, Union[Image.Image, bytes]]) -> None:
        self._images = dict(images)

    def get_bitmap(self, image_id: str) -> Image.Image:
        value = self._images.get(image_id)
        if value is None:
            raise ImageNotFoundError(f"No image for id {image_id!r}")
        if isinstance(value, Image.Image):
            return normalize_mode(value)
        try:
            return _decode(io.BytesIO(value))
        except OSError as e:
            raise ImageNotFoundError(f"Cannot decode image {image_id!r}: {e}") from e
