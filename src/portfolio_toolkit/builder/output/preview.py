"""
Module: builder.output.preview

Purpose:
    Rasterize rendered portfolio PDFs to PNG for quick visual review.

Key Functions:
    - render_previews(): Write one PNG per page
    - count_pages(): Page count of a PDF

Dependencies:
    - fitz (PyMuPDF): PDF rendering

Used By:
    - builder.controller: Optional preview export
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import fitz

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_DPI = 72


def count_pages(pdf_bytes: bytes) -> int:
    """Number of pages in a PDF document."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc.page_count


def render_previews(
    pdf_bytes: bytes,
    output_dir: Path,
    *,
    dpi: int = DEFAULT_PREVIEW_DPI,
    prefix: str = "page",
) -> List[Path]:
    """
    Render every page of a PDF to PNG.

    Args:
        pdf_bytes: PDF document
        output_dir: Directory for the PNG files (created if missing)
        dpi: Rendering resolution
        prefix: File name prefix

    Returns:
        Paths of the written PNG files, in page order

    Example:
        >>> render_previews(pdf, Path("out/previews"))
        [PosixPath('out/previews/page_001.png'), ...]
    """
    if dpi <= 0:
        raise ValueError(f"dpi must be positive: {dpi}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    zoom = dpi / 72.0
    matrix = fitz.Matrix(zoom, zoom)
    paths: List[Path] = []

    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            pix = page.get_pixmap(matrix=matrix, alpha=False)
            path = output_dir / f"{prefix}_{page.number + 1:03d}.png"
            pix.save(str(path))
            paths.append(path)

    logger.info(f"Wrote {len(paths)} preview images to {output_dir}")
    return paths
