"""
Module: builder.parsing.parser

Purpose:
    Split a compiled portfolio body into titled sections.

Key Functions:
    - parse_sections(): Main parsing function

Algorithm:
    1. Split the body into lines
    2. `## Title` opens a new section
    3. `# Title` is the document title and is dropped (the page header
       shows the student name instead)
    4. Non-empty lines before the first `##` seed an "Introduction"
       section
    5. A body with no `##` markers at all yields no sections; the
       assembler then renders the raw body as a single block

Dependencies:
    - core.models.content: Section

Used By:
    - builder.parsing.pairs: Pair building
    - builder.output.assembler: Document assembly
"""

from __future__ import annotations

import logging
from typing import List, Optional

from portfolio_toolkit.core.models import Section

logger = logging.getLogger(__name__)

SECTION_MARKER = "##"
TITLE_MARKER = "#"
INTRODUCTION_TITLE = "Introduction"


def _heading_text(line: str, marker: str) -> Optional[str]:
    """
    Return the heading text if the line opens with exactly this marker.

    `### Foo` is not a `##` heading and `## Foo` is not a `#` heading.
    """
    stripped = line.strip()
    if not stripped.startswith(marker):
        return None
    rest = stripped[len(marker):]
    if rest.startswith("#"):
        return None
    if rest and not rest[0].isspace():
        return None
    return rest.strip()


def section_title(line: str) -> Optional[str]:
    """Section title for a `## ` line, else None."""
    return _heading_text(line, SECTION_MARKER)


def is_document_title(line: str) -> bool:
    """True for a `# ` document title line."""
    return _heading_text(line, TITLE_MARKER) is not None


def parse_sections(body: str) -> List[Section]:
    """
    Parse a compiled body into sections.

    Args:
        body: Raw compiled body text

    Returns:
        Sections in document order; empty if the body has no `##` markers

    Example:
        >>> [s.title for s in parse_sections("Hi\\n## Math\\nGood")]
        ['Introduction', 'Math']
    """
    if not body:
        return []

    lines = body.splitlines()
    if not any(section_title(line) is not None for line in lines):
        logger.debug("Body has no section markers, no sections parsed")
        return []

    sections: List[Section] = []
    current_title: Optional[str] = None
    current_lines: List[str] = []

    for line in lines:
        title = section_title(line)
        if title is not None:
            if current_title is not None:
                sections.append(Section(current_title, tuple(current_lines)))
            current_title = title
            current_lines = []
            continue

        if is_document_title(line):
            continue

        if current_title is None:
            # Only real text opens the implicit introduction
            if line.strip():
                current_title = INTRODUCTION_TITLE
                current_lines.append(line)
            continue

        current_lines.append(line)

    if current_title is not None:
        sections.append(Section(current_title, tuple(current_lines)))

    logger.debug(f"Parsed {len(sections)} sections")
    return sections
