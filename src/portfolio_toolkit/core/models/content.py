"""
Module: content

Purpose:
    Parsed content structures derived from a document body. Sections
    hold raw body lines; content items split those lines into text runs
    and image tokens; content pairs group a text run with at most one
    image and are the atomic unit the paginator schedules.

Key Classes:
    - Section: Title plus body lines
    - TextItem / ImageItem: The ContentItem tagged union
    - ContentPair: Text run plus optional image

Dependencies:
    - dataclasses (std)

Used By:
    - builder.parsing: Produces sections, items and pairs
    - builder.layout: Measures and paginates pairs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Section:
    """
    A titled block of the document body.

    Attributes:
        title: Heading text (may be empty)
        body_lines: Raw lines belonging to the section, in order
    """

    title: str
    body_lines: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TextItem:
    """A run of text lines (newline-joined)."""

    text: str


@dataclass(frozen=True, slots=True)
class ImageItem:
    """
    An image token.

    Attributes:
        index: Running document-wide image index, assigned once at parse time
        description: Description from `[IMAGE: ...]`, empty for bare tokens
    """

    index: Optional[int]
    description: str = ""


ContentItem = Union[TextItem, ImageItem]


@dataclass(frozen=True, slots=True)
class ContentPair:
    """
    Text run followed by at most one image.

    Attributes:
        text: Text items accumulated before the image
        image: The closing image, or None for a trailing text-only pair

    Example:
        >>> pair = ContentPair(text=(TextItem("Hello"),), image=ImageItem(0))
        >>> pair.joined_text
        'Hello'
    """

    text: tuple[TextItem, ...] = ()
    image: Optional[ImageItem] = None

    @property
    def joined_text(self) -> str:
        """Text items joined with a blank line between runs."""
        return "\n\n".join(item.text for item in self.text)

    @property
    def has_text(self) -> bool:
        return bool(self.joined_text.strip())

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def is_empty(self) -> bool:
        return not self.has_text and not self.has_image
