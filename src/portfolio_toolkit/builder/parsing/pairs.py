"""
Module: builder.parsing.pairs

Purpose:
    Turn section body lines into content items (text runs and image
    tokens) and fold them into content pairs, the atomic unit the
    paginator schedules.

Key Functions:
    - build_content_items(): Lines -> TextItem/ImageItem list
    - build_content_pairs(): Items -> ContentPair list
    - build_section_pairs(): Sections -> pairs with a shared image index

Token Grammar:
    [IMAGE]                    anonymous image, next entry in the image list
    [IMAGE: description]       image with a description for fuzzy matching
    [PROVIDED_PHOTO: n]        resolved upstream, treated as plain text here

Dependencies:
    - re (std)
    - itertools (std)
    - core.models.content

Used By:
    - builder.output.assembler: Document assembly
"""

from __future__ import annotations

import itertools
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from portfolio_toolkit.core.models import (
    ContentItem,
    ContentPair,
    ImageItem,
    Section,
    TextItem,
)

IMAGE_TOKEN_PATTERN = re.compile(r"\[IMAGE(?:\s*:\s*([^\]]*))?\]", re.IGNORECASE)


def new_image_counter(start: int = 0) -> Iterator[int]:
    """Running image index shared by every section of one document."""
    return itertools.count(start)


def _image_item(match: re.Match, image_counter: Iterator[int]) -> ImageItem:
    description = (match.group(1) or "").strip()
    return ImageItem(index=next(image_counter), description=description)


def build_content_items(
    lines: Iterable[str],
    image_counter: Optional[Iterator[int]] = None,
) -> List[ContentItem]:
    """
    Split body lines into text runs and image tokens.

    Consecutive non-empty lines are merged into one TextItem (newline
    joined); a blank line ends the run. Each image token becomes an
    ImageItem whose index is drawn from `image_counter`.

    Args:
        lines: Section body lines
        image_counter: Shared running index; a fresh one starting at 0
            is used if omitted

    Returns:
        Content items in document order

    Example:
        >>> items = build_content_items(["Intro", "[IMAGE: cat]", "After"])
        >>> [type(i).__name__ for i in items]
        ['TextItem', 'ImageItem', 'TextItem']
    """
    if image_counter is None:
        image_counter = new_image_counter()

    items: List[ContentItem] = []
    text_run: List[str] = []

    def flush_text() -> None:
        if text_run:
            items.append(TextItem("\n".join(text_run)))
            text_run.clear()

    for line in lines:
        stripped = line.strip()
        if not stripped:
            flush_text()
            continue

        whole = IMAGE_TOKEN_PATTERN.fullmatch(stripped)
        if whole:
            flush_text()
            items.append(_image_item(whole, image_counter))
            continue

        matches = list(IMAGE_TOKEN_PATTERN.finditer(stripped))
        if not matches:
            text_run.append(stripped)
            continue

        # Inline tokens: each fragment before a token is its own item
        position = 0
        for match in matches:
            fragment = stripped[position:match.start()].strip()
            if fragment:
                text_run.append(fragment)
            flush_text()
            items.append(_image_item(match, image_counter))
            position = match.end()

        tail = stripped[position:].strip()
        if tail:
            text_run.append(tail)

    flush_text()
    return items


def build_content_pairs(items: Iterable[ContentItem]) -> List[ContentPair]:
    """
    Fold content items into pairs.

    Text accumulates until an image closes the pair; trailing text
    becomes a final pair with no image.

    Args:
        items: Content items in document order

    Returns:
        Content pairs in document order
    """
    pairs: List[ContentPair] = []
    text: List[TextItem] = []

    for item in items:
        if isinstance(item, ImageItem):
            pairs.append(ContentPair(text=tuple(text), image=item))
            text = []
        else:
            text.append(item)

    if text:
        pairs.append(ContentPair(text=tuple(text), image=None))

    return pairs


def build_section_pairs(
    sections: Iterable[Section],
) -> List[Tuple[Section, List[ContentPair]]]:
    """
    Build pairs for every section with one document-wide image index.

    Args:
        sections: Parsed sections in document order

    Returns:
        (section, pairs) tuples in document order
    """
    image_counter = new_image_counter()
    return [
        (section, build_content_pairs(build_content_items(section.body_lines, image_counter)))
        for section in sections
    ]
